"""Generator module for creating classic and cage puzzles."""

from .settings import GeneratorSettings, is_unique
from .cages import grow_regions, can_merge
from .generator import PuzzleGenerator, PuzzleKind, Puzzle

__all__ = [
    "GeneratorSettings",
    "is_unique",
    "grow_regions",
    "can_merge",
    "PuzzleGenerator",
    "PuzzleKind",
    "Puzzle",
]
