"""Cage generation by stochastic region growth."""

from __future__ import annotations
import logging
import random
from typing import Optional

from .settings import GeneratorSettings, Deadline, is_unique
from ..core.errors import InvariantViolation
from ..core.grid import Grid, Coords, SIZE
from ..core.regions import RegionPartition
from ..solvers import BacktrackingSolver

log = logging.getLogger(__name__)


def can_merge(solution: Grid, regions: RegionPartition, a: int, b: int) -> bool:
    """True if regions a and b hold no common digit in the solution."""
    seen = set()
    for x, y in regions.cells_of(a) + regions.cells_of(b):
        digit = solution.get(x, y)
        if digit in seen:
            return False
        seen.add(digit)
    return True


def grow_regions(solution: Grid, settings: Optional[GeneratorSettings] = None) -> RegionPartition:
    """
    Grow cages over a solved grid while the blank puzzle stays unique.

    Starts from one region per cell and repeatedly merges a random region
    with a random edge-adjacent one. A merge is kept only if the combined
    cells hold distinct digits in ``solution`` and the empty grid still
    has exactly one solution under the new partition. Each rejected merge
    costs one unit of the failure budget; an accepted merge resets it.

    Args:
        solution: A fully solved grid (the answer key).
        settings: Generation settings (defaults if omitted).

    Returns:
        The final region partition.

    Raises:
        InvariantViolation: If the singleton partition does not pin down
            ``solution`` uniquely.
        SearchLimitExceeded: If that first check hits the search caps.
    """
    settings = settings or GeneratorSettings()
    regions = RegionPartition.singletons(solution)
    blank = Grid()

    solver = BacktrackingSolver(settings.search_limits)
    found = len(solver.find_solutions(blank, regions, settings.cage_cap))
    if found != 1:
        raise InvariantViolation(
            f"Singleton regions must admit exactly one solution, found {found}"
        )

    deadline = Deadline(settings.time_limit)
    failures = 0
    merges = 0

    while failures < settings.merge_failures:
        if deadline.expired():
            log.info("Region growth stopped by time limit")
            break
        if len(regions) < 2:
            break

        a = regions.region_of(Coords(random.randrange(SIZE), random.randrange(SIZE)))
        b = regions.region_of(random.choice(regions.neighbour_cells(a)))

        if not can_merge(solution, regions, a, b):
            log.debug("Rejected merge of %d and %d: repeated digit", a, b)
            failures += 1
            continue

        snapshot = regions.snapshot()
        merged = regions.merge(a, b)
        if is_unique(blank, regions, settings.cage_cap, settings.search_limits):
            merges += 1
            failures = 0
            log.debug("Merged %d and %d into %d (sum %d)", a, b, merged, regions.sum_of(merged))
            continue

        log.debug("Rejected merge of %d and %d: solution not unique", a, b)
        regions.restore(snapshot)
        failures += 1

    regions.validate()
    log.info("Cage puzzle ready: %d merges, %d regions", merges, len(regions))
    return regions
