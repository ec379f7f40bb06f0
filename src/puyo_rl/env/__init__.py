"""Gymnasium environments for Puyo RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 12x6 Puyo environment
register(
    id="Puyo-12x6-v0",
    entry_point="puyo_rl.env.puyo_env:PuyoEnv",
)

__all__ = ["Puyo-12x6-v0"]
