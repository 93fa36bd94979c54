"""Randomized depth-first backtracking solver."""

from __future__ import annotations
import random
from typing import Optional, List

from .base_solver import BaseSolver, SearchLimits
from ..core.checker import find_conflict
from ..core.grid import Grid, DIGITS
from ..core.regions import RegionPartition


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over the first empty cell in row-major order.

    Candidate digits are tried in a freshly shuffled order at every node,
    so repeated runs on the same grid yield different solutions. Every
    placement is checked with ``find_conflict`` and undone in place on
    return; only recorded solutions are copied.
    """

    name = "Backtracking"

    def _search(
        self,
        grid: Grid,
        regions: Optional[RegionPartition],
        solutions: List[Grid],
        limit: int
    ) -> bool:
        self._tick()

        cell = grid.first_empty()
        if cell is None:
            solutions.append(grid.copy())
            return len(solutions) >= limit

        x, y = cell
        digits = list(DIGITS)
        random.shuffle(digits)

        for digit in digits:
            if find_conflict(grid, regions, cell, digit) is not None:
                continue
            grid.digits[y, x] = digit
            if self._search(grid, regions, solutions, limit):
                return True
            grid.digits[y, x] = 0
            self.stats.backtracks += 1

        return False


def find_solutions(
    grid: Grid,
    regions: Optional[RegionPartition] = None,
    limit: int = 1,
    limits: Optional[SearchLimits] = None
) -> List[Grid]:
    """Find up to ``limit`` solutions of ``grid``. See BaseSolver.find_solutions."""
    return BacktrackingSolver(limits).find_solutions(grid, regions, limit)


def find_solution(
    grid: Grid,
    regions: Optional[RegionPartition] = None,
    limits: Optional[SearchLimits] = None
) -> Optional[Grid]:
    """Return one solution of ``grid``, or None if it has none."""
    solutions = find_solutions(grid, regions, 1, limits)
    return solutions[0] if solutions else None


def count_solutions(
    grid: Grid,
    regions: Optional[RegionPartition] = None,
    limit: int = 2,
    limits: Optional[SearchLimits] = None
) -> int:
    """
    Count the solutions of a puzzle (up to limit).

    Stops early once limit is reached.
    """
    return len(find_solutions(grid, regions, limit, limits))


def has_unique_solution(
    grid: Grid,
    regions: Optional[RegionPartition] = None,
    limits: Optional[SearchLimits] = None
) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(grid, regions, 2, limits) == 1
