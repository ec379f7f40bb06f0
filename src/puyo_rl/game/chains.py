from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .grid import EMPTY, Coordinate, PuyoGrid
from .gravity import settle_in_place


MIN_GROUP_SIZE = 4

_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class ChainStep:
    """One resolution pass: every group popped at the same time."""

    groups: List[List[Coordinate]]
    cells_cleared: int


@dataclass
class ChainResult:
    grid: PuyoGrid
    chains: int = 0
    groups_cleared: int = 0
    cells_cleared: int = 0
    steps: List[ChainStep] = field(default_factory=list)


def find_groups(grid: PuyoGrid) -> List[List[Coordinate]]:
    """Maximal same-colored 4-connected groups, discovered in row-major order."""
    state = grid.grid
    visited = np.zeros(state.shape, dtype=np.bool_)
    groups: List[List[Coordinate]] = []
    for r in range(grid.rows):
        for c in range(grid.cols):
            color = state[r, c]
            if color == EMPTY or visited[r, c]:
                continue
            visited[r, c] = True
            group: List[Coordinate] = [(r, c)]
            queue = deque([(r, c)])
            while queue:
                cr, cc = queue.popleft()
                for dr, dc in _NEIGHBOURS:
                    nr, nc = cr + dr, cc + dc
                    if not grid.is_inside(nr, nc) or visited[nr, nc]:
                        continue
                    if state[nr, nc] != color:
                        continue
                    visited[nr, nc] = True
                    queue.append((nr, nc))
                    group.append((nr, nc))
            groups.append(group)
    return groups


def resolve_chains(grid: PuyoGrid, min_group_size: int = MIN_GROUP_SIZE) -> ChainResult:
    """Pop groups and let the rest fall until nothing else pops.

    Every qualifying group found in a pass is cleared at once and the pass
    counts as a single chain. The input grid is left untouched.
    """
    work = grid.copy()
    result = ChainResult(grid=work)
    while True:
        popping = [g for g in find_groups(work) if len(g) >= min_group_size]
        if not popping:
            break
        cleared = 0
        for group in popping:
            for r, c in group:
                work.set(r, c, EMPTY)
                cleared += 1
        result.steps.append(ChainStep(groups=popping, cells_cleared=cleared))
        result.chains += 1
        result.groups_cleared += len(popping)
        result.cells_cleared += cleared
        settle_in_place(work)
    return result
