from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Tuple


class Rotation(IntEnum):
    CW = 1
    CCW = -1


# Horizontal shifts tried, in order, when a rotation is blocked
KICK_OFFSETS: Tuple[int, ...] = (-1, 1, -2, 2)


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    color: int

    def shifted(self, d_row: int, d_col: int) -> "Cell":
        return replace(self, row=self.row + d_row, col=self.col + d_col)


@dataclass(frozen=True)
class Pair:
    """The falling two-cell piece.

    ``base`` is the pivot; ``child`` always sits one step away from it
    (offset (-1, 0), (1, 0), (0, -1) or (0, 1)).
    """

    base: Cell
    child: Cell

    @classmethod
    def spawn(cls, colors: Tuple[int, int], col: int) -> "Pair":
        # Vertical, child on top and hanging into the hidden row
        return cls(Cell(0, col, colors[0]), Cell(-1, col, colors[1]))

    @property
    def cells(self) -> Tuple[Cell, Cell]:
        return (self.base, self.child)

    @property
    def offset(self) -> Tuple[int, int]:
        return (self.child.row - self.base.row, self.child.col - self.base.col)

    @property
    def colors(self) -> Tuple[int, int]:
        return (self.base.color, self.child.color)

    def translated(self, d_row: int, d_col: int) -> "Pair":
        return Pair(self.base.shifted(d_row, d_col), self.child.shifted(d_row, d_col))

    def rotated(self, direction: Rotation) -> "Pair":
        rel_row, rel_col = self.offset
        if direction == Rotation.CW:
            new_row, new_col = -rel_col, rel_row
        else:
            new_row, new_col = rel_col, -rel_row
        child = replace(self.child, row=self.base.row + new_row, col=self.base.col + new_col)
        return Pair(self.base, child)
