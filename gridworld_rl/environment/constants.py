"""Constants for the GridWorld navigation environment."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple


class Action(IntEnum):
    """Cardinal moves. Ordinals double as network output indices."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


ACTIONS: Tuple[Action, ...] = tuple(Action)
N_ACTIONS: int = len(ACTIONS)

# (dx, dy); y grows downward
ACTION_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.RIGHT: (1, 0),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
}

ACTION_ARROWS: Dict[Action, str] = {
    Action.UP: "^",
    Action.RIGHT: ">",
    Action.DOWN: "v",
    Action.LEFT: "<",
}

# Rewards
REWARD_GOAL: float = 1.0
REWARD_STEP: float = -0.01

METADATA = {
    "render_modes": ["ansi"],
    "render_fps": 10,
}
