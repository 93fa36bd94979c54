"""Puzzle generator for classic and cage puzzles."""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .cages import grow_regions
from .settings import GeneratorSettings, Deadline, is_unique
from ..core.errors import InvariantViolation
from ..core.grid import Grid, SIZE, DIGITS
from ..core.regions import RegionPartition
from ..solvers import BacktrackingSolver

log = logging.getLogger(__name__)


class PuzzleKind(Enum):
    """Kinds of puzzle the generator can build."""
    CLASSIC = "classic"
    CAGES = "cages"


@dataclass
class Puzzle:
    """A generated puzzle with its answer key."""
    grid: Grid
    solution: Grid
    regions: Optional[RegionPartition] = None

    @property
    def kind(self) -> PuzzleKind:
        return PuzzleKind.CLASSIC if self.regions is None else PuzzleKind.CAGES


class PuzzleGenerator:
    """
    Generator for unique-solution puzzles.

    Algorithm:
    1. Solve a grid holding one random digit to get a random answer key
    2. Classic: remove digits one at a time, keeping each removal only
       while the puzzle still has exactly one solution
    3. Cages: start from one region per cell and merge neighbours while
       the blank grid still has exactly one solution
    """

    def __init__(self, seed: Optional[int] = None, settings: Optional[GeneratorSettings] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility. Seeds the process-wide
                ``random`` source, which both the solver and generator draw from.
            settings: Generation settings (defaults if omitted).
        """
        self.settings = settings or GeneratorSettings()
        if seed is not None:
            random.seed(seed)

    def generate(self, kind: PuzzleKind = PuzzleKind.CLASSIC) -> Puzzle:
        """Generate a puzzle of the given kind."""
        if kind is PuzzleKind.CAGES:
            return self.generate_cages()
        return self.generate_classic()

    def generate_batch(self, count: int, kind: PuzzleKind = PuzzleKind.CLASSIC) -> List[Puzzle]:
        """Generate several puzzles of the same kind."""
        return [self.generate(kind) for _ in range(count)]

    def solved_grid(self) -> Grid:
        """Produce a random complete grid."""
        grid = Grid()
        grid.set(random.randrange(SIZE), random.randrange(SIZE), random.choice(DIGITS))
        solutions = BacktrackingSolver().find_solutions(grid, None, 1)
        if not solutions:
            raise InvariantViolation("A grid with a single digit must be solvable")
        return solutions[0]

    def generate_classic(self) -> Puzzle:
        """Build a classic puzzle by removing digits from a solved grid."""
        solution = self.solved_grid()
        grid = solution.copy()
        self._remove_digits(grid)
        grid.fix_filled()
        return Puzzle(grid, solution)

    def generate_cages(self) -> Puzzle:
        """Build a cage puzzle by growing regions over a solved grid."""
        solution = self.solved_grid()
        regions = grow_regions(solution, self.settings)
        return Puzzle(Grid(), solution, regions)

    def _remove_digits(self, grid: Grid) -> None:
        """
        Clear random cells while the puzzle keeps exactly one solution.

        Stops after ``removal_failures`` consecutive rejected removals.
        """
        deadline = Deadline(self.settings.time_limit)
        failures = 0
        removed = 0

        while failures < self.settings.removal_failures:
            if deadline.expired():
                log.info("Digit removal stopped by time limit")
                break

            x, y = random.choice(grid.filled_cells())
            digit = grid.get(x, y)
            grid.clear(x, y)

            if is_unique(grid, None, self.settings.uniqueness_cap, self.settings.search_limits):
                removed += 1
                failures = 0
                log.debug("Removed %d at (%d, %d)", digit, x, y)
                continue

            grid.set(x, y, digit)
            failures += 1

        log.info("Classic puzzle ready: %d removed, %d givens", removed, grid.count_filled())
