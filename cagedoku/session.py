"""Interactive puzzle session: the surface a front end drives."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .core.checker import find_conflict, count_options
from .core.errors import SearchLimitExceeded
from .core.grid import Grid, Coords
from .generator import PuzzleGenerator, PuzzleKind, Puzzle
from .solvers import BacktrackingSolver, SearchLimits

log = logging.getLogger(__name__)

STATUS_SOLUTION_CAP = 10


def _plural(n: int, singular: str, plural: str, limit: Optional[int] = None) -> str:
    if n == 0:
        return f"No {plural}"
    if n == 1:
        return f"One {singular}"
    if limit is None or n < limit:
        return f"{n} {plural}"
    return f"{limit} or more {plural}"


@dataclass
class SessionStatus:
    """Progress counters for the current grid."""
    solutions: int
    empty_cells: int
    options: int
    solution_cap: int = STATUS_SOLUTION_CAP

    def describe(self) -> str:
        return ", ".join([
            _plural(self.solutions, "solution", "solutions", self.solution_cap),
            _plural(self.empty_cells, "empty cell", "empty cells"),
            _plural(self.options, "option", "options"),
        ])


class PuzzleSession:
    """
    One puzzle being played.

    Holds the working grid, the optional cage partition and the answer key.
    Given cells can only be changed in edit mode; digits placed in edit
    mode become givens themselves.
    """

    def __init__(self, generator: Optional[PuzzleGenerator] = None, puzzle: Optional[Puzzle] = None):
        self.generator = generator or PuzzleGenerator()
        self.edit_mode = False
        self.conflict: Optional[Coords] = None
        if puzzle is None:
            puzzle = self.generator.generate(PuzzleKind.CLASSIC)
        self._install(puzzle)

    def _install(self, puzzle: Puzzle) -> None:
        self.grid = puzzle.grid.copy()
        self.regions = puzzle.regions
        self._solution: Optional[Grid] = puzzle.solution
        self._givens = self.grid.givens()
        self.conflict = None

    @property
    def kind(self) -> PuzzleKind:
        return PuzzleKind.CLASSIC if self.regions is None else PuzzleKind.CAGES

    def new_classic(self) -> None:
        self._install(self.generator.generate(PuzzleKind.CLASSIC))

    def new_cages(self) -> None:
        self._install(self.generator.generate(PuzzleKind.CAGES))

    def check(self, coords: Coords, digit: int) -> Optional[Coords]:
        """Return the cell conflicting with ``digit`` at ``coords``, or None if legal."""
        return find_conflict(self.grid, self.regions, Coords(*coords).check(), digit)

    def place(self, coords: Coords, digit: int) -> bool:
        """
        Try to write ``digit`` at ``coords``.

        Returns:
            True if the digit was placed. On a conflict the conflicting cell
            is stored in ``self.conflict`` and the grid is left unchanged.
        """
        x, y = Coords(*coords).check()
        if self.grid.is_fixed(x, y) and not self.edit_mode:
            return False

        self.conflict = self.check((x, y), digit)
        if self.conflict is not None:
            return False

        self.grid.set(x, y, digit)
        self.grid.fixed[y, x] = self.edit_mode
        return True

    def erase(self, coords: Coords) -> bool:
        x, y = Coords(*coords).check()
        if self.grid.is_fixed(x, y) and not self.edit_mode:
            return False
        self.grid.clear(x, y)
        self.conflict = None
        return True

    def toggle_edit_mode(self) -> bool:
        self.edit_mode = not self.edit_mode
        return self.edit_mode

    def clear(self) -> None:
        """Empty the whole grid. Only allowed in edit mode."""
        if not self.edit_mode:
            raise PermissionError("Clearing the grid requires edit mode")
        self.grid = Grid()
        self.conflict = None

    def reveal_solution(self) -> Optional[Grid]:
        """
        Fill the grid with the solution and return it.

        The stored answer key is used while the givens are unchanged;
        after editing, the current givens are solved instead. Returns None
        if the edited givens have no solution.
        """
        solution = self._solution if self.grid.givens() == self._givens else None
        if solution is None:
            log.debug("Givens were edited; solving them afresh")
            solutions = BacktrackingSolver().find_solutions(self.grid.givens(), self.regions, 1)
            if not solutions:
                return None
            solution = solutions[0]
            self._solution = solution
            self._givens = self.grid.givens()

        fixed = self.grid.fixed.copy()
        self.grid = solution.copy()
        self.grid.fixed = fixed
        self.conflict = None
        return solution.copy()

    def status(self, limits: Optional[SearchLimits] = None) -> SessionStatus:
        """
        Count completions (up to a cap), empty cells and legal placements.

        A search cut short by ``limits`` reports the solutions found so far.
        """
        solver = BacktrackingSolver(limits)
        try:
            solutions = len(solver.find_solutions(self.grid, self.regions, STATUS_SOLUTION_CAP))
        except SearchLimitExceeded:
            solutions = solver.stats.solutions
        return SessionStatus(
            solutions=solutions,
            empty_cells=self.grid.count_empty(),
            options=count_options(self.grid, self.regions),
        )
