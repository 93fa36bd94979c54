"""Placement checks shared by the solver and interactive play."""

from __future__ import annotations
import numpy as np
from typing import Optional, TYPE_CHECKING

from .grid import Coords, BOX_SIZE, DIGITS, SIZE

if TYPE_CHECKING:
    from .grid import Grid
    from .regions import RegionPartition


def find_conflict(
    grid: Grid,
    regions: Optional[RegionPartition],
    coords: Coords,
    digit: int
) -> Optional[Coords]:
    """
    Find a cell that forbids placing ``digit`` at ``coords``.

    Checks the row, then the column, then the 3x3 box, then (when a
    partition is given) the region holding ``coords``. The cell at
    ``coords`` itself is never reported for a duplicate.

    For a region, a member already holding ``digit`` is the conflict.
    Failing that, the region's sum must stay reachable: with P the sum of
    the other filled members and B the number of other empty members,
    P + d + B(B+1)/2 must not exceed the target and P + d + B(19-B)/2
    must not fall short of it. A bound violation is reported at the last
    member cell in row-major order, which only approximates the culprit.

    Args:
        grid: The grid to check against. Not modified.
        regions: Optional region partition.
        coords: Target cell as (x, y).
        digit: Candidate digit, 1-9.

    Returns:
        Coordinates of the first conflicting cell, or None if the placement is legal.
    """
    if digit < 1 or digit > SIZE:
        raise ValueError(f"Digit must be 1-{SIZE}, got {digit}")
    cx, cy = Coords(*coords).check()
    digits = grid.digits

    # Row
    for x in np.flatnonzero(digits[cy, :] == digit):
        if x != cx:
            return Coords(int(x), cy)

    # Column
    for y in np.flatnonzero(digits[:, cx] == digit):
        if y != cy:
            return Coords(cx, int(y))

    # Box
    bx = (cx // BOX_SIZE) * BOX_SIZE
    by = (cy // BOX_SIZE) * BOX_SIZE
    box = digits[by:by + BOX_SIZE, bx:bx + BOX_SIZE]
    for i in np.flatnonzero(box == digit):
        dy, dx = divmod(int(i), BOX_SIZE)
        if bx + dx != cx or by + dy != cy:
            return Coords(bx + dx, by + dy)

    if regions is None:
        return None
    return _region_conflict(digits, regions, cx, cy, digit)


def _region_conflict(
    digits: np.ndarray,
    regions: RegionPartition,
    cx: int,
    cy: int,
    digit: int
) -> Optional[Coords]:
    region_id = int(regions.ids[cy, cx])
    target = regions.sum_of(region_id)

    partial = 0
    blanks = 0
    last = Coords(cx, cy)
    ys, xs = np.nonzero(regions.ids == region_id)
    for y, x in zip(ys.tolist(), xs.tolist()):
        last = Coords(x, y)
        if x == cx and y == cy:
            continue
        value = int(digits[y, x])
        if value == 0:
            blanks += 1
        elif value == digit:
            return last
        else:
            partial += value

    lowest = partial + digit + blanks * (blanks + 1) // 2
    highest = partial + digit + blanks * (19 - blanks) // 2
    if lowest > target or highest < target:
        return last
    return None


def count_options(grid: Grid, regions: Optional[RegionPartition] = None) -> int:
    """Number of (empty cell, digit) pairs that are currently legal."""
    count = 0
    for coords in grid.empty_cells():
        for digit in DIGITS:
            if find_conflict(grid, regions, coords, digit) is None:
                count += 1
    return count


def is_valid(grid: Grid, regions: Optional[RegionPartition] = None) -> bool:
    """
    Check that no filled cell conflicts with the rest of the grid.

    Does not check whether the grid is complete.
    """
    for coords in grid.filled_cells():
        if find_conflict(grid, regions, coords, grid.get(*coords)) is not None:
            return False
    return True


def is_solved(grid: Grid, regions: Optional[RegionPartition] = None) -> bool:
    """Check that the grid is complete and conflict-free."""
    return grid.is_complete() and is_valid(grid, regions)
