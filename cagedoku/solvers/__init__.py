"""Solvers module for classic and cage puzzles."""

from .base_solver import BaseSolver, SolverStats, SearchLimits
from .backtracking import (
    BacktrackingSolver,
    find_solutions,
    find_solution,
    count_solutions,
    has_unique_solution,
)

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SearchLimits",
    "BacktrackingSolver",
    "find_solutions",
    "find_solution",
    "count_solutions",
    "has_unique_solution",
]
