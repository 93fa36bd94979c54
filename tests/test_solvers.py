"""Unit tests for the backtracking solver."""

import random

import pytest
from conftest import TEST_SOLUTION
from cagedoku.core.checker import is_solved
from cagedoku.core.errors import SearchLimitExceeded
from cagedoku.core.grid import Grid
from cagedoku.core.regions import RegionPartition
from cagedoku.solvers import (
    BacktrackingSolver,
    SearchLimits,
    find_solutions,
    find_solution,
    count_solutions,
    has_unique_solution,
)


class TestBacktrackingSolver:
    """Tests for BacktrackingSolver."""

    def test_solve_puzzle(self, puzzle):
        """Test solving a known puzzle."""
        solutions = find_solutions(puzzle, limit=1)

        assert len(solutions) == 1
        assert is_solved(solutions[0])
        assert solutions[0].to_string() == TEST_SOLUTION

    def test_unique_puzzle_yields_one_solution_under_higher_cap(self, puzzle):
        assert count_solutions(puzzle, limit=5) == 1
        assert has_unique_solution(puzzle)

    def test_input_not_modified(self, puzzle):
        before = puzzle.copy()
        find_solutions(puzzle, limit=2)
        assert puzzle == before

    def test_limit_caps_solution_count(self):
        solutions = find_solutions(Grid(), limit=3)

        assert len(solutions) == 3
        assert len({s.to_string() for s in solutions}) == 3
        assert all(is_solved(s) for s in solutions)

    def test_empty_grid_is_not_unique(self):
        assert not has_unique_solution(Grid())

    def test_unsolvable_grid(self):
        grid = Grid()
        for x in range(8):
            grid.set(x, 0, x + 1)
        grid.set(8, 1, 9)
        assert find_solutions(grid, limit=2) == []
        assert find_solution(grid) is None

    def test_full_grid_is_its_own_solution(self, solution):
        assert find_solutions(solution, limit=2) == [solution]

    def test_zero_limit_rejected(self, puzzle):
        with pytest.raises(ValueError):
            find_solutions(puzzle, limit=0)

    def test_shuffle_follows_seed(self):
        random.seed(7)
        first = find_solution(Grid())
        random.seed(7)
        second = find_solution(Grid())
        assert first == second

    def test_singleton_regions_pin_down_solution(self, solution):
        regions = RegionPartition.singletons(solution)
        solutions = find_solutions(Grid(), regions, limit=3)
        assert solutions == [solution]

    def test_stats_collected(self, puzzle):
        """Test that stats are collected."""
        solver = BacktrackingSolver()
        solver.find_solutions(puzzle, None, 1)

        assert solver.stats.solutions == 1
        assert solver.stats.nodes_explored >= 51
        assert solver.stats.time_seconds > 0
        assert not solver.stats.limit_hit
        assert solver.stats.to_dict()["algorithm"] == "Backtracking"

    def test_node_limit(self):
        solver = BacktrackingSolver(SearchLimits(max_nodes=10))
        with pytest.raises(SearchLimitExceeded) as excinfo:
            solver.find_solutions(Grid(), None, 1)

        assert excinfo.value.nodes == 11
        assert solver.stats.limit_hit

    def test_time_limit(self):
        solver = BacktrackingSolver(SearchLimits(time_limit=0.0))
        with pytest.raises(SearchLimitExceeded):
            solver.find_solutions(Grid(), None, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
