from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .grid import EMPTY, PuyoGrid
from .pieces import KICK_OFFSETS, Pair, Rotation


def can_place(pair: Pair, grid: PuyoGrid) -> bool:
    """Collision test shared by movement, rotation and gravity.

    Cells above the field (row < 0) never collide; everything else must be
    inside the columns, above the floor and on an empty cell.
    """
    for cell in pair.cells:
        if cell.col < 0 or cell.col >= grid.cols:
            return False
        if cell.row >= grid.rows:
            return False
        if cell.row >= 0 and grid.get(cell.row, cell.col) != EMPTY:
            return False
    return True


def rotate_with_kicks(pair: Pair, grid: PuyoGrid, direction: Rotation) -> Optional[Pair]:
    rotated = pair.rotated(direction)
    if can_place(rotated, grid):
        return rotated
    for kick in KICK_OFFSETS:
        kicked = rotated.translated(0, kick)
        if can_place(kicked, grid):
            return kicked
    return None


def drop_position(pair: Pair, grid: PuyoGrid) -> Pair:
    while True:
        below = pair.translated(1, 0)
        if not can_place(below, grid):
            return pair
        pair = below


@dataclass
class ScoringRules:
    points_per_cell: int = 10
    chain_bonus: float = 0.5
    min_group_size: int = 4

    def multiplier(self, chains: int) -> float:
        # 1 chain -> x1.0, 2 -> x1.5, 3 -> x2.0, ...
        return 1 + (chains - 1) * self.chain_bonus

    def score_for_clear(self, cells_cleared: int, chains: int) -> int:
        if cells_cleared <= 0:
            return 0
        return math.floor(cells_cleared * self.points_per_cell * self.multiplier(chains))
