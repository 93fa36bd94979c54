"""Generation settings and the uniqueness check shared by both generators."""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from ..core.errors import SearchLimitExceeded
from ..core.grid import Grid
from ..core.regions import RegionPartition
from ..solvers import BacktrackingSolver, SearchLimits

log = logging.getLogger(__name__)


@dataclass
class GeneratorSettings:
    """Tuning knobs for puzzle generation."""
    # Consecutive rejected removals before a classic puzzle is considered done
    removal_failures: int = 20
    # Consecutive rejected merges before cage growth stops
    merge_failures: int = 3
    # Solution cap when checking a classic puzzle for uniqueness
    uniqueness_cap: int = 2
    # Solution cap when checking a cage partition for uniqueness
    cage_cap: int = 3
    # Caps applied to every uniqueness check
    search_limits: SearchLimits = field(default_factory=SearchLimits)
    # Wall-clock budget for each retry loop, in seconds
    time_limit: Optional[float] = None

    def __post_init__(self):
        if self.removal_failures < 1 or self.merge_failures < 1:
            raise ValueError("Failure budgets must be at least 1")
        if self.uniqueness_cap < 2 or self.cage_cap < 2:
            raise ValueError("Uniqueness caps must be at least 2")


def is_unique(
    grid: Grid,
    regions: Optional[RegionPartition],
    cap: int,
    limits: Optional[SearchLimits] = None
) -> bool:
    """
    True if the grid has exactly one solution.

    Searches for up to ``cap`` solutions. A search that hits its node or
    time cap counts as not unique.
    """
    solver = BacktrackingSolver(limits)
    try:
        return len(solver.find_solutions(grid, regions, cap)) == 1
    except SearchLimitExceeded as e:
        log.debug("Uniqueness check abandoned after %d nodes: %s", e.nodes, e)
        return False


class Deadline:
    """Wall-clock budget for a retry loop. ``None`` never expires."""

    def __init__(self, seconds: Optional[float]):
        self.expires_at = None if seconds is None else time.perf_counter() + seconds

    def expired(self) -> bool:
        return self.expires_at is not None and time.perf_counter() > self.expires_at
