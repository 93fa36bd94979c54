"""9x9 grid representation for classic and cage puzzles."""

from __future__ import annotations
import numpy as np
from typing import List, NamedTuple, Optional

SIZE = 9
BOX_SIZE = 3
DIGITS = range(1, SIZE + 1)


class Coords(NamedTuple):
    """Cell position: ``x`` is the column, ``y`` the row."""
    x: int
    y: int

    def check(self) -> Coords:
        if not (0 <= self.x < SIZE and 0 <= self.y < SIZE):
            raise ValueError(f"Coordinates out of range: {tuple(self)}")
        return self


class Cell(NamedTuple):
    """Snapshot of a single cell. ``digit`` is None when the cell is empty."""
    digit: Optional[int]
    fixed: bool


class Grid:
    """
    A 9x9 Sudoku grid.

    Digits live in a numpy array indexed ``[y, x]`` with 0 meaning empty.
    A parallel boolean array marks the given ("fixed") cells; the solver
    never looks at it.
    """

    def __init__(self, digits: Optional[np.ndarray] = None, fixed: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            digits: Optional 9x9 array of digits (0 for empty). Copied.
            fixed: Optional 9x9 boolean array of given cells. Copied.
        """
        if digits is not None:
            digits = np.asarray(digits)
            if digits.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE})")
            if digits.min() < 0 or digits.max() > SIZE:
                raise ValueError(f"Digits must be 0-{SIZE}")
            self.digits = digits.astype(np.int8)
        else:
            self.digits = np.zeros((SIZE, SIZE), dtype=np.int8)

        if fixed is not None:
            fixed = np.asarray(fixed, dtype=bool)
            if fixed.shape != (SIZE, SIZE):
                raise ValueError(f"Fixed mask shape must be ({SIZE}, {SIZE})")
            self.fixed = fixed.copy()
        else:
            self.fixed = np.zeros((SIZE, SIZE), dtype=bool)

    def copy(self) -> Grid:
        """Create a deep copy of the grid."""
        return Grid(self.digits, self.fixed)

    def get(self, x: int, y: int) -> int:
        """Get the digit at column x, row y. 0 means empty."""
        Coords(x, y).check()
        return int(self.digits[y, x])

    def set(self, x: int, y: int, digit: int) -> None:
        """Set the digit at column x, row y. Use 0 to clear."""
        if digit < 0 or digit > SIZE:
            raise ValueError(f"Digit must be 0-{SIZE}, got {digit}")
        Coords(x, y).check()
        self.digits[y, x] = digit

    def clear(self, x: int, y: int) -> None:
        """Empty the cell and drop its given flag."""
        Coords(x, y).check()
        self.digits[y, x] = 0
        self.fixed[y, x] = False

    def cell(self, x: int, y: int) -> Cell:
        Coords(x, y).check()
        digit = int(self.digits[y, x])
        return Cell(digit or None, bool(self.fixed[y, x]))

    def is_empty(self, x: int, y: int) -> bool:
        Coords(x, y).check()
        return self.digits[y, x] == 0

    def is_fixed(self, x: int, y: int) -> bool:
        Coords(x, y).check()
        return bool(self.fixed[y, x])

    def empty_cells(self) -> List[Coords]:
        """All empty cells in row-major order."""
        ys, xs = np.nonzero(self.digits == 0)
        return [Coords(int(x), int(y)) for y, x in zip(ys, xs)]

    def first_empty(self) -> Optional[Coords]:
        """The first empty cell in row-major order, or None if the grid is full."""
        flat = np.flatnonzero(self.digits == 0)
        if flat.size == 0:
            return None
        y, x = divmod(int(flat[0]), SIZE)
        return Coords(x, y)

    def filled_cells(self) -> List[Coords]:
        ys, xs = np.nonzero(self.digits != 0)
        return [Coords(int(x), int(y)) for y, x in zip(ys, xs)]

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.digits == 0))

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.digits))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def fix_filled(self) -> None:
        """Mark every filled cell as given and every empty cell as editable."""
        self.fixed = self.digits != 0

    def givens(self) -> Grid:
        """A copy holding only the fixed cells."""
        return Grid(np.where(self.fixed, self.digits, 0), self.fixed)

    def to_string(self) -> str:
        """Compact 81-character form, 0 for empty cells."""
        return ''.join(str(int(v)) for v in self.digits.flatten())

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Create a grid from an 81-character string.

        Args:
            s: Row-major digits, ``0`` or ``.`` for empty. Whitespace is ignored.
               Filled cells are marked as given.
        """
        s = ''.join(s.split())
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        values = []
        for c in s:
            if c == '.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise ValueError(f"Unexpected character in puzzle string: {c!r}")

        grid = cls(np.array(values).reshape(SIZE, SIZE))
        grid.fix_filled()
        return grid

    def __str__(self) -> str:
        """Pretty-print the grid."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for y in range(SIZE):
            if y % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for x in range(SIZE):
                val = self.digits[y, x]
                row_str += ' .' if val == 0 else f' {val}'
                if (x + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Grid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return np.array_equal(self.digits, other.digits)

    def __hash__(self) -> int:
        return hash(self.to_string())
