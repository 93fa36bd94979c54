"""Classic and cage Sudoku generation, solving and validation."""

__version__ = "1.0.0"
