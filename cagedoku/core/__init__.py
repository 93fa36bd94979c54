"""Core module for grid, region and conflict-checking primitives."""

from .grid import Grid, Cell, Coords, SIZE
from .regions import RegionPartition
from .checker import find_conflict, count_options, is_valid, is_solved
from .errors import InvariantViolation, SearchLimitExceeded

__all__ = [
    "Grid",
    "Cell",
    "Coords",
    "SIZE",
    "RegionPartition",
    "find_conflict",
    "count_options",
    "is_valid",
    "is_solved",
    "InvariantViolation",
    "SearchLimitExceeded",
]
