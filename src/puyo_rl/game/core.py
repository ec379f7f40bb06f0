from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Callable, Optional, Tuple

import numpy as np

from .chains import ChainResult, resolve_chains
from .gravity import settle_in_place
from .grid import PuyoGrid
from .pieces import Pair, Rotation
from .rules import ScoringRules, can_place, drop_position, rotate_with_kicks


MIN_COLORS = 3
MAX_COLORS = 5

ColorSource = Callable[[], int]


@dataclass
class ColorCycle:
    """Deterministic color source repeating a fixed sequence.

    Holds its position as plain data, so a session copy carries an
    independent cursor.
    """

    colors: Tuple[int, ...]
    position: int = 0

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("ColorCycle needs at least one color")
        self.colors = tuple(int(c) for c in self.colors)

    def __call__(self) -> int:
        color = self.colors[self.position % len(self.colors)]
        self.position += 1
        return color


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


class Phase(Enum):
    EMPTY = auto()
    SPAWNING = auto()
    FALLING = auto()
    LOCKING = auto()
    SETTLING = auto()
    RESOLVING = auto()
    GAME_OVER = auto()


@dataclass
class GameConfig:
    rows: int = 12
    cols: int = 6
    color_count: int = 5
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid must be at least 1x1, got {self.rows}x{self.cols}")
        self.color_count = min(max(int(self.color_count), MIN_COLORS), MAX_COLORS)

    @property
    def spawn_col(self) -> int:
        # Centered; left of center on even widths
        return (self.cols - 1) // 2


@dataclass(frozen=True)
class LockResult:
    overflow: bool
    chain: Optional[ChainResult] = None
    points: int = 0


class PuyoGame:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        color_source: Optional[ColorSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.color_source = color_source
        self.rng = random.Random(self.config.random_seed)
        self.grid = PuyoGrid(self.config.rows, self.config.cols)
        self.active: Optional[Pair] = None
        self.next_pair: Tuple[int, int] = (0, 0)
        self.score = 0
        self.chain_count = 0
        self.phase = Phase.EMPTY
        self.last_lock: Optional[LockResult] = None
        self.reset()

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.active = None
        self.score = 0
        self.chain_count = 0
        self.last_lock = None
        self.phase = Phase.EMPTY
        self.next_pair = self._draw_pair()
        self._spawn_pair()

    def copy(self) -> "PuyoGame":
        clone = copy.copy(self)
        clone.grid = self.grid.copy()
        # Sources must be deep-copyable; plain functions copy as themselves
        clone.color_source = copy.deepcopy(self.color_source)
        clone.rng = random.Random()
        clone.rng.setstate(self.rng.getstate())
        return clone

    # ----- Colors -----
    def _draw_color(self) -> int:
        if self.color_source is not None:
            return int(self.color_source())
        return self.rng.randint(1, self.config.color_count)

    def _draw_pair(self) -> Tuple[int, int]:
        return (self._draw_color(), self._draw_color())

    # ----- Spawning -----
    def _spawn_pair(self) -> None:
        self.phase = Phase.SPAWNING
        pair = Pair.spawn(self.next_pair, self.config.spawn_col)
        self.next_pair = self._draw_pair()
        if not can_place(pair, self.grid):
            self.active = None
            self.phase = Phase.GAME_OVER
            return
        self.active = pair
        self.phase = Phase.FALLING

    # ----- Movement -----
    def _move(self, d_row: int, d_col: int) -> bool:
        assert self.active is not None
        candidate = self.active.translated(d_row, d_col)
        if can_place(candidate, self.grid):
            self.active = candidate
            return True
        return False

    def _rotate(self, direction: Rotation) -> bool:
        assert self.active is not None
        rotated = rotate_with_kicks(self.active, self.grid, direction)
        if rotated is None:
            return False
        self.active = rotated
        return True

    def _gravity_step(self) -> Optional[LockResult]:
        if self._move(1, 0):
            return None
        return self._lock_active()

    def hard_drop(self) -> Optional[LockResult]:
        if self.active is None or self.game_over:
            return None
        self.active = drop_position(self.active, self.grid)
        return self._lock_active()

    # ----- Locking -----
    def _lock_active(self) -> LockResult:
        assert self.active is not None
        pair, self.active = self.active, None
        self.phase = Phase.LOCKING
        overflow = False
        for cell in pair.cells:
            if cell.row < 0:
                overflow = True
                continue
            self.grid.set(cell.row, cell.col, cell.color)
        if overflow:
            # Stack has no room left: no settling, no clears
            self.phase = Phase.GAME_OVER
            self.last_lock = LockResult(overflow=True)
            return self.last_lock

        self.phase = Phase.SETTLING
        settle_in_place(self.grid)

        self.phase = Phase.RESOLVING
        chain = resolve_chains(self.grid, self.rules.min_group_size)
        # Keep the live board apart from the grid handed back in the result
        self.grid = chain.grid.copy()
        points = 0
        if chain.cells_cleared > 0:
            points = self.rules.score_for_clear(chain.cells_cleared, chain.chains)
            self.score += points
            self.chain_count += chain.chains
        self.last_lock = LockResult(overflow=False, chain=chain, points=points)

        if self.grid.is_row_occupied(0):
            self.phase = Phase.GAME_OVER
        else:
            self._spawn_pair()
        return self.last_lock

    # ----- Public driver API -----
    def tick(self) -> Optional[LockResult]:
        if self.game_over or self.active is None:
            return None
        return self._gravity_step()

    def command(self, action: Action) -> Optional[LockResult]:
        if self.game_over or self.active is None:
            return None
        if action == Action.LEFT:
            self._move(0, -1)
        elif action == Action.RIGHT:
            self._move(0, 1)
        elif action == Action.ROTATE_CW:
            self._rotate(Rotation.CW)
        elif action == Action.ROTATE_CCW:
            self._rotate(Rotation.CCW)
        elif action == Action.SOFT_DROP:
            return self._gravity_step()
        elif action == Action.HARD_DROP:
            return self.hard_drop()
        return None

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.render_state(), 0, True, self._info(None)
        lock = self.command(action)
        points = lock.points if lock is not None else 0
        return self.render_state(), points, self.game_over, self._info(lock)

    def _info(self, lock: Optional[LockResult]) -> dict:
        chains = 0
        cells = 0
        if lock is not None and lock.chain is not None:
            chains = lock.chain.chains
            cells = lock.chain.cells_cleared
        return {
            "score": self.score,
            "chain_count": self.chain_count,
            "locked": lock is not None,
            "chains": chains,
            "cells_cleared": cells,
        }

    # ----- Queries for rendering -----
    def render_state(self) -> np.ndarray:
        # Grid copy with the falling pair drawn on top (hidden row skipped)
        state = self.grid.clone_state()
        if self.active is not None:
            for cell in self.active.cells:
                if self.grid.is_inside(cell.row, cell.col):
                    state[cell.row, cell.col] = cell.color
        return state

    def ghost_pair(self) -> Optional[Pair]:
        if self.active is None:
            return None
        return drop_position(self.active, self.grid)
