"""Unit tests for the interactive puzzle session."""

import pytest
from conftest import TEST_PUZZLE, TEST_SOLUTION
from cagedoku.core.grid import Grid, Coords
from cagedoku.core.regions import RegionPartition
from cagedoku.generator import Puzzle, PuzzleKind
from cagedoku.session import PuzzleSession, SessionStatus
from cagedoku.solvers import SearchLimits


@pytest.fixture
def session():
    puzzle = Puzzle(Grid.from_string(TEST_PUZZLE), Grid.from_string(TEST_SOLUTION))
    return PuzzleSession(puzzle=puzzle)


class TestPlacement:
    """Placing and erasing digits."""

    def test_check_reports_conflict(self, session):
        assert session.check(Coords(2, 0), 5) == Coords(0, 0)
        assert session.check(Coords(2, 0), 4) is None

    def test_place_legal_digit(self, session):
        assert session.place(Coords(2, 0), 4)
        assert session.grid.get(2, 0) == 4
        assert not session.grid.is_fixed(2, 0)
        assert session.conflict is None

    def test_place_conflicting_digit(self, session):
        assert not session.place(Coords(2, 0), 5)
        assert session.conflict == Coords(0, 0)
        assert session.grid.is_empty(2, 0)

    def test_fixed_cells_are_protected(self, session):
        assert not session.place(Coords(0, 0), 1)
        assert not session.erase(Coords(0, 0))
        assert session.grid.get(0, 0) == 5

    def test_erase(self, session):
        session.place(Coords(2, 0), 4)
        assert session.erase(Coords(2, 0))
        assert session.grid.is_empty(2, 0)

    def test_edit_mode_places_givens(self, session):
        assert session.toggle_edit_mode()
        assert session.erase(Coords(0, 0))
        assert session.place(Coords(0, 0), 5)
        assert session.grid.is_fixed(0, 0)

    def test_out_of_range_cell(self, session):
        with pytest.raises(ValueError):
            session.place(Coords(9, 0), 1)

    def test_clear_requires_edit_mode(self, session):
        with pytest.raises(PermissionError):
            session.clear()
        session.toggle_edit_mode()
        session.clear()
        assert session.grid.count_empty() == 81


class TestSolutionAndStatus:
    """Revealing the answer and progress counters."""

    def test_reveal_uses_answer_key(self, session):
        session.place(Coords(2, 0), 4)
        solution = session.reveal_solution()

        assert solution.to_string() == TEST_SOLUTION
        assert session.grid == solution
        assert session.grid.is_fixed(0, 0)
        assert not session.grid.is_fixed(2, 0)

    def test_reveal_after_editing_solves_givens(self, session):
        session.toggle_edit_mode()
        session.clear()
        for x, digit in enumerate([1, 2, 3, 4, 5, 6, 7, 8]):
            session.place(Coords(x, 0), digit)

        solution = session.reveal_solution()
        assert solution.is_complete()
        assert solution.get(8, 0) == 9

    def test_status(self, session):
        status = session.status()
        assert status.solutions == 1
        assert status.empty_cells == 51
        assert status.options > 51
        assert status.describe().startswith("One solution, 51 empty cells, ")

    def test_status_after_reveal(self, session):
        session.reveal_solution()
        assert session.status().describe() == "One solution, No empty cells, No options"

    def test_status_caps_solutions(self):
        puzzle = Puzzle(Grid(), Grid.from_string(TEST_SOLUTION))
        status = PuzzleSession(puzzle=puzzle).status()
        assert status.solutions == 10
        assert status.describe().startswith("10 or more solutions, 81 empty cells")

    def test_status_reports_partial_count_when_capped(self):
        puzzle = Puzzle(Grid(), Grid.from_string(TEST_SOLUTION))
        status = PuzzleSession(puzzle=puzzle).status(SearchLimits(max_nodes=30))
        # 30 nodes cannot reach the bottom of an 81-cell search
        assert status.solutions == 0
        assert status.empty_cells == 81
        assert status.describe().startswith("No solutions, 81 empty cells")

    def test_describe_wording(self):
        assert SessionStatus(0, 1, 1).describe() == "No solutions, One empty cell, One option"
        assert SessionStatus(3, 40, 12).describe() == "3 solutions, 40 empty cells, 12 options"


class TestCageSession:
    """A session over a cage puzzle."""

    def test_cage_puzzle_checks_regions(self):
        solution = Grid.from_string(TEST_SOLUTION)
        regions = RegionPartition.singletons(solution)
        session = PuzzleSession(puzzle=Puzzle(Grid(), solution, regions))

        assert session.kind is PuzzleKind.CAGES
        assert session.check(Coords(0, 0), 5) is None
        assert session.check(Coords(0, 0), 4) == Coords(0, 0)
        assert session.status().solutions == 1
        assert session.reveal_solution() == solution


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
