"""Game module for Puyo RL.

Exports the core engine and supporting classes:
- PuyoGrid: Colored cell storage
- Pair / Cell / Rotation: The falling two-cell piece
- can_place / rotate_with_kicks / ScoringRules: Placement and scoring rules
- settle: Column gravity
- resolve_chains: Group popping and chain counting
- PuyoGame: Session state machine
- new_session / command / tick / reset: Value-style driver API
"""

from .grid import PuyoGrid, COLOR_NAMES, format_grid, print_grid
from .pieces import Cell, Pair, Rotation, KICK_OFFSETS
from .rules import ScoringRules, can_place, drop_position, rotate_with_kicks
from .gravity import settle, settle_in_place
from .chains import ChainResult, ChainStep, find_groups, resolve_chains
from .core import Action, ColorCycle, GameConfig, LockResult, Phase, PuyoGame
from .session import command, new_session, reset, tick

__all__ = [
    "PuyoGrid",
    "COLOR_NAMES",
    "format_grid",
    "print_grid",
    "Cell",
    "Pair",
    "Rotation",
    "KICK_OFFSETS",
    "ScoringRules",
    "can_place",
    "drop_position",
    "rotate_with_kicks",
    "settle",
    "settle_in_place",
    "ChainResult",
    "ChainStep",
    "find_groups",
    "resolve_chains",
    "Action",
    "ColorCycle",
    "GameConfig",
    "LockResult",
    "Phase",
    "PuyoGame",
    "command",
    "new_session",
    "reset",
    "tick",
]
