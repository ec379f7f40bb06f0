from __future__ import annotations

import numpy as np

from .grid import EMPTY, PuyoGrid


def compact_column(state: np.ndarray, col: int) -> bool:
    """Drop every cell of one column to the floor, keeping their order.

    Returns True if any cell moved.
    """
    column = state[:, col]
    filled = column[column != EMPTY]
    packed = np.zeros_like(column)
    if filled.size:
        packed[-filled.size :] = filled
    if np.array_equal(packed, column):
        return False
    state[:, col] = packed
    return True


def settle_in_place(grid: PuyoGrid) -> bool:
    changed_any = False
    # One pass is enough, but keep going until nothing moves
    for _ in range(max(1, grid.rows)):
        changed = False
        for col in range(grid.cols):
            if compact_column(grid.grid, col):
                changed = True
        if not changed:
            break
        changed_any = True
    return changed_any


def settle(grid: PuyoGrid) -> PuyoGrid:
    settled = grid.copy()
    settle_in_place(settled)
    return settled
