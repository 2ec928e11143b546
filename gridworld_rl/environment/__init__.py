"""GridWorld environment: core dynamics, Gymnasium adapter and text rendering."""

from .constants import ACTIONS, ACTION_DELTAS, N_ACTIONS, REWARD_GOAL, REWARD_STEP, Action
from .gridworld import GridWorld, Position
from .gym_env import GridWorldEnv

__all__ = [
    "Action",
    "ACTIONS",
    "ACTION_DELTAS",
    "N_ACTIONS",
    "REWARD_GOAL",
    "REWARD_STEP",
    "GridWorld",
    "GridWorldEnv",
    "Position",
]
