from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from puyo_rl.game import COLOR_NAMES, Action, GameConfig, PuyoGame


_RGB = {
    "red": (230, 60, 60),
    "green": (60, 200, 90),
    "blue": (60, 110, 230),
    "yellow": (240, 210, 50),
    "purple": (170, 80, 220),
}

# Color ids start at 1; 0 is the empty background
PALETTE = {0: (30, 30, 36)}
PALETTE.update({i + 1: _RGB[name] for i, name in enumerate(COLOR_NAMES)})


class PuyoEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 gravity_every: int = 1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = -1.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = PuyoGame(config)
        self.render_mode = render_mode

        # Reward shaping parameters
        self.gravity_every = max(1, int(gravity_every))
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "points": 0.01,   # per engine score point
            "chains": 1.0,    # per chain in a resolution
            "lock": 0.0,      # per pair locked
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        rows = self.game.config.rows
        cols = self.game.config.cols
        colors = self.game.config.color_count

        # Grid with the falling pair drawn in, active pair as (row, col, color) x2, next colors
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=colors, shape=(rows, cols), dtype=np.int8),
                "active": spaces.Box(low=-1, high=max(rows, cols, colors), shape=(2, 3), dtype=np.int8),
                "next_pair": spaces.Box(low=0, high=colors, shape=(2,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        active = np.zeros((2, 3), dtype=np.int8)
        if self.game.active is not None:
            for i, cell in enumerate(self.game.active.cells):
                active[i] = (cell.row, cell.col, cell.color)
        obs: Dict[str, Any] = {
            "grid": self.game.render_state().astype(np.int8),
            "active": active,
            "next_pair": np.array(self.game.next_pair, dtype=np.int8),
        }
        return obs

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "chain_count": self.game.chain_count,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int | np.integer):
        reward_components: Dict[str, float] = {}
        locks = []

        lock = self.game.command(Action(int(action)))
        if lock is not None:
            locks.append(lock)
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            lock = self.game.tick()
            if lock is not None:
                locks.append(lock)

        points = sum(lk.points for lk in locks)
        chains = sum(lk.chain.chains for lk in locks if lk.chain is not None)
        reward_components["points"] = self.reward_weights["points"] * float(points)
        reward_components["chains"] = self.reward_weights["chains"] * float(chains)
        reward_components["lock"] = self.reward_weights["lock"] * float(len(locks))
        reward_components["step"] = self.step_penalty

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(points)
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.game.render_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = PALETTE.get(int(grid[y, x]), (200, 200, 200))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
