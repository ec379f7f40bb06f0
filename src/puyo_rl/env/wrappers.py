from __future__ import annotations

from typing import Any, Dict

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class OneHotGridWrapper(gym.ObservationWrapper):
    """Replaces the color-id grid with one binary plane per color.

    Plane 0 marks empty cells, plane k marks color k. Shape (colors + 1, rows, cols),
    which suits CNN feature extractors.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.observation_space, spaces.Dict)
        grid_space = env.observation_space["grid"]
        assert isinstance(grid_space, spaces.Box)
        rows, cols = grid_space.shape
        self.n_planes = int(grid_space.high.max()) + 1
        self.observation_space = spaces.Dict(
            {
                **{k: v for k, v in env.observation_space.spaces.items() if k != "grid"},
                "grid": spaces.Box(low=0, high=1, shape=(self.n_planes, rows, cols), dtype=np.uint8),
            }
        )

    def observation(self, observation: Dict[str, Any]) -> Dict[str, Any]:
        grid = np.asarray(observation["grid"])
        planes = (grid[None, :, :] == np.arange(self.n_planes)[:, None, None]).astype(np.uint8)
        out = dict(observation)
        out["grid"] = planes
        return out
