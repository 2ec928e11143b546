"""
Deterministic GridWorld
=======================
The agent starts at (0, 0) on a square grid and must reach the goal in the
opposite corner, (size-1, size-1).

Rewards:
    +1.0   on the step that reaches the goal (episode done)
    -0.01  on every other step

Moving into the border is allowed but does nothing on that axis, so the
agent simply stays put.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

from .constants import ACTION_DELTAS, REWARD_GOAL, REWARD_STEP, Action


class Position(NamedTuple):
    """Grid cell (x, y). Hashable and ordered, so it works as a dict key."""

    x: int
    y: int


class GridWorld:
    """Square grid with a fixed start and a fixed goal."""

    def __init__(self, size: int = 8):
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError(f"Grid size must be a positive integer, got {size!r}")

        self.size = size
        self.goal = Position(size - 1, size - 1)
        self.current_state = Position(0, 0)
        self.reset()

    def reset(self) -> Position:
        """Put the agent back on (0, 0)."""
        self.current_state = Position(0, 0)
        return self.current_state

    def step(self, action: Action) -> Tuple[Position, float, bool]:
        """Apply `action` and return (next_state, reward, done)."""
        dx, dy = ACTION_DELTAS[Action(action)]
        limit = self.size - 1

        x = min(max(self.current_state.x + dx, 0), limit)
        y = min(max(self.current_state.y + dy, 0), limit)
        self.current_state = Position(x, y)

        done = self.current_state == self.goal
        reward = REWARD_GOAL if done else REWARD_STEP
        return self.current_state, reward, done

    def get_state(self) -> Position:
        return self.current_state

    def get_grid_size(self) -> int:
        return self.size

    def get_goal(self) -> Position:
        return self.goal
