from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0
COLOR_NAMES: Tuple[str, ...] = ("red", "green", "blue", "yellow", "purple")


class PuyoGrid:
    """Fixed-size playfield of colored cells.

    Cells hold 0 for empty and a positive color id (1..5) otherwise.
    Row 0 is the top visible row; the virtual row -1 above it is never stored.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = int(rows)
        self.cols = int(cols)
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "PuyoGrid":
        """Build a grid from text rows, '.' for empty and digits for colors."""
        if not lines:
            raise ValueError("Expected at least one row")
        width = len(lines[0])
        out = cls(len(lines), width)
        for r, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(f"Row {r} has width {len(line)}, expected {width}")
            for c, ch in enumerate(line):
                if ch == ".":
                    continue
                if not ch.isdigit():
                    raise ValueError(f"Unexpected cell {ch!r} at ({r}, {c})")
                out.grid[r, c] = int(ch)
        return out

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int) -> None:
        # numpy would silently wrap negative indices
        if not self.is_inside(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")

    def get(self, row: int, col: int) -> int:
        self._check(row, col)
        return int(self.grid[row, col])

    def set(self, row: int, col: int, color: int) -> None:
        self._check(row, col)
        self.grid[row, col] = color

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) == EMPTY

    def is_row_occupied(self, row: int) -> bool:
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} outside grid of {self.rows} rows")
        return bool(np.any(self.grid[row, :] != EMPTY))

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "PuyoGrid":
        new_grid = PuyoGrid(self.rows, self.cols)
        new_grid.grid = self.grid.copy()
        return new_grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuyoGrid):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __repr__(self) -> str:
        return f"PuyoGrid({self.rows}x{self.cols}, filled={self.count_filled()})"


def format_grid(state: np.ndarray) -> str:
    """Text dump of a grid state, '.' for empty cells."""
    return "\n".join("".join(str(int(v)) if v else "." for v in row) for row in state)


def print_grid(state: np.ndarray) -> None:
    print(format_grid(state))
