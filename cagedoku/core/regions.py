"""Partition of the grid into sum-constrained regions (cages)."""

from __future__ import annotations
import numpy as np
from typing import Dict, List, Set

from .errors import InvariantViolation
from .grid import Coords, Grid, SIZE

# 4-neighbourhood, no diagonals
_DIRS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class RegionPartition:
    """
    Maps every cell to exactly one region id and every live id to its sum.

    Ids are handed out by a counter that only ever grows, so an id retired
    by a merge is never seen again. ``snapshot()``/``restore()`` copy both
    maps by value; restoring never rewinds the counter.
    """

    def __init__(self, ids: np.ndarray, sums: Dict[int, int], next_id: int):
        self.ids = np.array(ids, dtype=np.int32)
        self.sums = dict(sums)
        self.next_id = next_id
        self.validate()

    @classmethod
    def singletons(cls, solution: Grid) -> RegionPartition:
        """One region per cell, each summing to that cell's solved digit."""
        if not solution.is_complete():
            raise InvariantViolation("Singleton regions need a fully solved grid")
        ids = np.arange(SIZE * SIZE, dtype=np.int32).reshape(SIZE, SIZE)
        sums = {int(ids[y, x]): int(solution.digits[y, x])
                for y in range(SIZE) for x in range(SIZE)}
        return cls(ids, sums, SIZE * SIZE)

    def validate(self) -> None:
        """Raise InvariantViolation unless the maps describe a total, consistent partition."""
        if self.ids.shape != (SIZE, SIZE):
            raise InvariantViolation(f"Region map must cover {SIZE}x{SIZE} cells")
        mapped = set(int(i) for i in np.unique(self.ids))
        if mapped != set(self.sums):
            raise InvariantViolation(
                f"Region map and sums disagree: orphan ids {sorted(mapped ^ set(self.sums))}"
            )
        for region_id, total in self.sums.items():
            if total <= 0:
                raise InvariantViolation(f"Region {region_id} has non-positive sum {total}")
            if region_id >= self.next_id:
                raise InvariantViolation(f"Region id {region_id} is ahead of the id counter")

    def region_of(self, coords: Coords) -> int:
        x, y = coords
        return int(self.ids[y, x])

    def sum_of(self, region_id: int) -> int:
        try:
            return self.sums[region_id]
        except KeyError:
            raise InvariantViolation(f"Unknown or retired region id {region_id}") from None

    def region_ids(self) -> List[int]:
        return sorted(self.sums)

    def cells_of(self, region_id: int) -> List[Coords]:
        """Member cells of a region in row-major order."""
        self.sum_of(region_id)
        ys, xs = np.nonzero(self.ids == region_id)
        return [Coords(int(x), int(y)) for y, x in zip(ys, xs)]

    def neighbour_cells(self, region_id: int) -> List[Coords]:
        """Cells outside the region sharing an edge with one of its members."""
        members = self.cells_of(region_id)
        seen: Set[Coords] = set()
        result = []
        for x, y in members:
            for dx, dy in _DIRS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < SIZE and 0 <= ny < SIZE):
                    continue
                if self.ids[ny, nx] == region_id:
                    continue
                c = Coords(nx, ny)
                if c not in seen:
                    seen.add(c)
                    result.append(c)
        result.sort(key=lambda c: (c.y, c.x))
        return result

    def neighbours(self, region_id: int) -> List[int]:
        """Ids of the regions adjacent to ``region_id``."""
        return sorted({self.region_of(c) for c in self.neighbour_cells(region_id)})

    def merge(self, a: int, b: int) -> int:
        """
        Join regions a and b under a fresh id and retire both.

        Returns:
            The new region id.
        """
        if a == b:
            raise InvariantViolation(f"Cannot merge region {a} with itself")
        total = self.sum_of(a) + self.sum_of(b)

        new_id = self.next_id
        self.next_id += 1
        self.ids[(self.ids == a) | (self.ids == b)] = new_id
        del self.sums[a]
        del self.sums[b]
        self.sums[new_id] = total
        return new_id

    def snapshot(self) -> RegionPartition:
        """Value copy of the partition."""
        return RegionPartition(self.ids, self.sums, self.next_id)

    def restore(self, snapshot: RegionPartition) -> None:
        """Replace both maps with the snapshot's, keeping the id counter monotonic."""
        self.ids = snapshot.ids.copy()
        self.sums = dict(snapshot.sums)
        self.next_id = max(self.next_id, snapshot.next_id)

    def label_map(self) -> np.ndarray:
        """Region ids renumbered 0..n-1 in order of first appearance (row-major)."""
        labels = np.zeros((SIZE, SIZE), dtype=np.int32)
        order: Dict[int, int] = {}
        for y in range(SIZE):
            for x in range(SIZE):
                region_id = int(self.ids[y, x])
                labels[y, x] = order.setdefault(region_id, len(order))
        return labels

    def describe(self) -> str:
        """Region map with compact labels followed by each label's sum."""
        labels = self.label_map()
        width = len(str(int(labels.max())))
        lines = [' '.join(str(int(v)).rjust(width) for v in row) for row in labels]
        sums = {}
        for y in range(SIZE):
            for x in range(SIZE):
                sums.setdefault(int(labels[y, x]), self.sums[int(self.ids[y, x])])
        lines.append('')
        lines.extend(f"{label:>{width}}: {total}" for label, total in sums.items())
        return '\n'.join(lines)

    def __len__(self) -> int:
        return len(self.sums)

    def __repr__(self) -> str:
        return f"RegionPartition(regions={len(self)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegionPartition):
            return False
        return np.array_equal(self.ids, other.ids) and self.sums == other.sums
