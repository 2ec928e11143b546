"""Gymnasium adapter around the deterministic GridWorld.

The core GridWorld returns (state, reward, done). This wrapper exposes the
same dynamics through the Gymnasium API so the grid can be driven by any
Gymnasium-compatible tooling. The step ceiling is reported as `truncated`.

The training loops, the greedy test mode and the CLI drive `GridWorld`
directly; this adapter is only an entry point for external tooling.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import METADATA, N_ACTIONS, Action
from .gridworld import GridWorld
from .rendering import render_text


class GridWorldEnv(gym.Env):
    metadata = METADATA

    def __init__(
        self,
        size: int = 8,
        max_steps: int | None = 200,
        render_mode: str | None = None,
    ):
        self.world = GridWorld(size)
        self.size = self.world.get_grid_size()

        if max_steps is None:
            max_steps = 3 * self.size**2
        self.max_steps = int(max_steps)
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {max_steps!r}")

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode

        self.steps: int = 0

        self.action_space = spaces.Discrete(N_ACTIONS)
        self.observation_space = spaces.Box(
            low=0, high=self.size - 1, shape=(2,), dtype=np.int64
        )

    def _get_obs(self) -> np.ndarray:
        x, y = self.world.get_state()
        return np.array([x, y], dtype=np.int64)

    def _get_info(self) -> Dict[str, Any]:
        ax, ay = self.world.get_state()
        gx, gy = self.world.get_goal()
        return {
            "steps": int(self.steps),
            "dist_to_goal": abs(gx - ax) + abs(gy - ay),
        }

    def reset(
        self, seed: int | None = None, options: dict | None = None
    ) -> tuple[np.ndarray, Dict[str, Any]]:
        # Dynamics are deterministic; the seed only initialises np_random.
        super().reset(seed=seed)
        self.steps = 0
        self.world.reset()
        return self._get_obs(), self._get_info()

    def step(self, action: int) -> tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        assert self.action_space.contains(action), f"Invalid action: {action}"

        self.steps += 1
        _, reward, done = self.world.step(Action(int(action)))

        terminated = bool(done)
        truncated = (not terminated) and self.steps >= self.max_steps

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def render(self) -> str | None:
        if self.render_mode == "ansi":
            return render_text(self.size, self.world.get_state(), self.world.get_goal())
        return None
