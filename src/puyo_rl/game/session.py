"""Value-style driver API.

Each call takes a session and hands back a new one; the session passed in is
never modified, so a driver can keep, compare or discard old states freely.
"""

from __future__ import annotations

from typing import Optional

from .core import Action, ColorSource, GameConfig, PuyoGame
from .rules import ScoringRules


def new_session(
    color_count: int = 5,
    *,
    rows: int = 12,
    cols: int = 6,
    seed: Optional[int] = None,
    color_source: Optional[ColorSource] = None,
    rules: Optional[ScoringRules] = None,
) -> PuyoGame:
    config = GameConfig(rows=rows, cols=cols, color_count=color_count, random_seed=seed)
    return PuyoGame(config, rules=rules, color_source=color_source)


def command(session: PuyoGame, action: Action) -> PuyoGame:
    nxt = session.copy()
    nxt.command(Action(action))
    return nxt


def tick(session: PuyoGame) -> PuyoGame:
    nxt = session.copy()
    nxt.tick()
    return nxt


def reset(session: PuyoGame, seed: Optional[int] = None) -> PuyoGame:
    nxt = session.copy()
    nxt.reset(seed)
    return nxt
