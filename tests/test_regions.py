"""Unit tests for region partitions."""

import pytest
import numpy as np
from cagedoku.core.errors import InvariantViolation
from cagedoku.core.grid import Coords
from cagedoku.core.regions import RegionPartition


def partition_with(sums):
    """Singleton ids 0..80 with every sum 1 except the ones given."""
    ids = np.arange(81).reshape(9, 9)
    all_sums = {i: 1 for i in range(81)}
    all_sums.update(sums)
    return RegionPartition(ids, all_sums, 81)


class TestRegionPartition:
    """Tests for RegionPartition class."""

    def test_singletons_cover_grid(self, solution):
        regions = RegionPartition.singletons(solution)
        assert len(regions) == 81
        assert set(np.unique(regions.ids)) == set(regions.sums)
        assert regions.sum_of(regions.region_of(Coords(0, 0))) == 5
        assert regions.sum_of(regions.region_of(Coords(8, 8))) == 9

    def test_singletons_need_solved_grid(self, puzzle):
        with pytest.raises(InvariantViolation):
            RegionPartition.singletons(puzzle)

    def test_orphan_sum_rejected(self):
        ids = np.zeros((9, 9), dtype=int)
        with pytest.raises(InvariantViolation):
            RegionPartition(ids, {0: 405, 1: 3}, 2)

    def test_missing_sum_rejected(self):
        ids = np.arange(81).reshape(9, 9)
        with pytest.raises(InvariantViolation):
            RegionPartition(ids, {i: 1 for i in range(80)}, 81)

    def test_non_positive_sum_rejected(self):
        with pytest.raises(InvariantViolation):
            partition_with({5: 0})

    def test_merge_adjacent_singletons(self):
        """Merging sums 4 and 5 gives 9 and retires both ids."""
        regions = partition_with({0: 4, 1: 5})
        merged = regions.merge(0, 1)

        assert regions.sum_of(merged) == 9
        assert regions.region_of(Coords(0, 0)) == merged
        assert regions.region_of(Coords(1, 0)) == merged
        assert regions.cells_of(merged) == [Coords(0, 0), Coords(1, 0)]
        with pytest.raises(InvariantViolation):
            regions.sum_of(0)
        with pytest.raises(InvariantViolation):
            regions.sum_of(1)
        regions.validate()

    def test_merge_ids_are_never_reused(self):
        regions = partition_with({})
        first = regions.merge(0, 1)
        second = regions.merge(first, 2)
        assert second > first > 80
        with pytest.raises(InvariantViolation):
            regions.merge(first, 3)

    def test_merge_with_itself_rejected(self):
        regions = partition_with({})
        with pytest.raises(InvariantViolation):
            regions.merge(4, 4)

    def test_snapshot_restore_reverts_both_maps(self):
        regions = partition_with({0: 4, 1: 5})
        snapshot = regions.snapshot()
        merged = regions.merge(0, 1)

        regions.restore(snapshot)
        assert regions == snapshot
        assert regions.sum_of(0) == 4
        assert regions.sum_of(1) == 5
        with pytest.raises(InvariantViolation):
            regions.sum_of(merged)
        # The id handed out before the restore stays retired
        assert regions.merge(0, 1) == merged + 1

    def test_snapshot_is_independent(self):
        regions = partition_with({})
        snapshot = regions.snapshot()
        regions.merge(0, 1)
        assert len(snapshot) == 81
        assert snapshot.region_of(Coords(0, 0)) == 0

    def test_corner_neighbours(self):
        regions = partition_with({})
        assert regions.neighbour_cells(0) == [Coords(1, 0), Coords(0, 1)]
        assert regions.neighbours(0) == [1, 9]

    def test_neighbours_of_merged_region(self):
        regions = partition_with({})
        merged = regions.merge(0, 1)
        assert regions.neighbour_cells(merged) == [Coords(2, 0), Coords(0, 1), Coords(1, 1)]

    def test_no_wraparound(self):
        regions = partition_with({})
        # Cell (8, 0) is id 8; (0, 1) is id 9 and must not count as adjacent
        assert 9 not in regions.neighbours(8)

    def test_describe(self, solution):
        regions = RegionPartition.singletons(solution)
        regions.merge(0, 1)
        text = regions.describe()
        assert text.splitlines()[0].split()[:2] == ["0", "0"]
        assert " 0: 8" in text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
