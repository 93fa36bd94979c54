from setuptools import setup, find_packages

setup(
    name="cagedoku",
    version="1.0.0",
    description="Classic & Cage Sudoku Generator and Backtracking Solver",
    packages=find_packages(include=["cagedoku", "cagedoku.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "cagedoku=cagedoku.cli:main",
        ],
    },
)
