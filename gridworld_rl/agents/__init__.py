"""Agent modules for GridWorld navigation."""

from .dqn_agent import DQNAgent
from .q_learning_agent import OPTIMISTIC_INIT, QLearningAgent

__all__ = ["DQNAgent", "OPTIMISTIC_INIT", "QLearningAgent"]
