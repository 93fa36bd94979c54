"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import time

from ..core.grid import Grid
from ..core.regions import RegionPartition
from ..core.errors import SearchLimitExceeded


@dataclass
class SearchLimits:
    """Optional caps on a single search. None means unbounded."""
    max_nodes: Optional[int] = None
    time_limit: Optional[float] = None


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    solutions: int = 0
    time_seconds: float = 0.0
    nodes_explored: int = 0
    backtracks: int = 0
    limit_hit: bool = False

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solutions": self.solutions,
            "time_seconds": self.time_seconds,
            "nodes_explored": self.nodes_explored,
            "backtracks": self.backtracks,
            "limit_hit": self.limit_hit,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for solvers that enumerate completions of a grid."""

    name: str = "BaseSolver"

    def __init__(self, limits: Optional[SearchLimits] = None):
        self.limits = limits or SearchLimits()
        self.stats = SolverStats(algorithm=self.name)
        self._deadline: Optional[float] = None

    def find_solutions(
        self,
        grid: Grid,
        regions: Optional[RegionPartition] = None,
        limit: int = 1
    ) -> List[Grid]:
        """
        Find up to ``limit`` complete, conflict-free grids extending ``grid``.

        Args:
            grid: The puzzle. Not modified; the search runs on a copy.
            regions: Optional region partition to respect.
            limit: Stop once this many solutions have been recorded.

        Returns:
            List of solved grids, at most ``limit`` long.

        Raises:
            SearchLimitExceeded: If the node or time cap was reached.
        """
        if limit < 1:
            raise ValueError(f"Solution limit must be at least 1, got {limit}")

        self.stats = SolverStats(algorithm=self.name)
        start_time = time.perf_counter()
        self._deadline = None
        if self.limits.time_limit is not None:
            self._deadline = start_time + self.limits.time_limit

        solutions: List[Grid] = []
        try:
            self._search(grid.copy(), regions, solutions, limit)
        except SearchLimitExceeded:
            self.stats.limit_hit = True
            raise
        finally:
            self.stats.solutions = len(solutions)
            self.stats.time_seconds = time.perf_counter() - start_time

        return solutions

    def _tick(self) -> None:
        """Count one search node and enforce the configured caps."""
        self.stats.nodes_explored += 1
        nodes = self.stats.nodes_explored
        if self.limits.max_nodes is not None and nodes > self.limits.max_nodes:
            raise SearchLimitExceeded(
                f"Node limit of {self.limits.max_nodes} reached", nodes=nodes
            )
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise SearchLimitExceeded(
                f"Time limit of {self.limits.time_limit}s reached",
                nodes=nodes,
                elapsed=self.limits.time_limit,
            )

    @abstractmethod
    def _search(
        self,
        grid: Grid,
        regions: Optional[RegionPartition],
        solutions: List[Grid],
        limit: int
    ) -> bool:
        """
        Internal search to be implemented by subclasses.

        Args:
            grid: A private copy of the puzzle (can be modified).
            regions: Optional region partition.
            solutions: Output list; append copies of solved grids.
            limit: Solution count at which to stop.

        Returns:
            True once ``limit`` solutions have been recorded.
        """
        pass
