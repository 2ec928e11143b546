"""GridWorld navigation with a tabular Q-learning agent and a from-scratch DQN."""

from .environment import ACTIONS, Action, GridWorld, GridWorldEnv, Position
from .agents import DQNAgent, QLearningAgent
from .training.core import (
    EpisodeStats,
    TrainingHistory,
    run_dqn_episode,
    run_q_learning_episode,
    train_dqn,
    train_q_learning,
)
from .training.eval import evaluate_dqn, evaluate_q_learning

__version__ = "1.0.0"

__all__ = [
    "ACTIONS",
    "Action",
    "DQNAgent",
    "EpisodeStats",
    "GridWorld",
    "GridWorldEnv",
    "Position",
    "QLearningAgent",
    "TrainingHistory",
    "evaluate_dqn",
    "evaluate_q_learning",
    "run_dqn_episode",
    "run_q_learning_episode",
    "train_dqn",
    "train_q_learning",
]
