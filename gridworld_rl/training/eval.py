"""Evaluation loop (test mode).

Greedy runs with learning switched off. Epsilon is forced to 0 for the
duration and restored afterwards, whatever happens inside the loop.
"""

from __future__ import annotations

from typing import Callable, List

import numpy as np

from ..agents.dqn_agent import DQNAgent
from ..agents.q_learning_agent import QLearningAgent
from ..config import EVAL_CONFIG
from ..environment.gridworld import GridWorld
from .core import EpisodeStats, run_dqn_episode, run_q_learning_episode


def _evaluate(
    agent,
    run_episode: Callable[..., EpisodeStats],
    n_episodes: int,
    max_steps: int,
) -> dict:
    saved_epsilon = agent.get_epsilon()
    agent.set_epsilon(0.0)
    try:
        episodes: List[EpisodeStats] = [
            run_episode(i, max_steps) for i in range(int(n_episodes))
        ]
    finally:
        agent.set_epsilon(saved_epsilon)

    successes = sum(ep.reached_goal for ep in episodes)
    success_steps = [ep.steps for ep in episodes if ep.reached_goal]

    return {
        "success_rate": successes / max(1, int(n_episodes)),
        "successes": int(successes),
        "avg_steps": float(np.mean(success_steps)) if success_steps else 0.0,
        "paths": [ep.path for ep in episodes],
        "episodes": episodes,
    }


def evaluate_q_learning(
    agent: QLearningAgent,
    env: GridWorld,
    n_episodes: int = EVAL_CONFIG["n_episodes"],
    max_steps: int = EVAL_CONFIG["max_steps"],
) -> dict:
    """Greedy evaluation of a tabular agent.

    Returns a dictionary with success_rate, successes, avg_steps (over
    successful episodes), paths and the raw episodes.
    """
    return _evaluate(
        agent,
        lambda i, steps: run_q_learning_episode(
            agent, env, max_steps=steps, learn=False, record_path=True, episode=i
        ),
        n_episodes,
        max_steps,
    )


def evaluate_dqn(
    agent: DQNAgent,
    env: GridWorld,
    n_episodes: int = EVAL_CONFIG["n_episodes"],
    max_steps: int = EVAL_CONFIG["max_steps"],
) -> dict:
    """Greedy evaluation of a DQN agent. Same return shape as evaluate_q_learning."""
    return _evaluate(
        agent,
        lambda i, steps: run_dqn_episode(
            agent, env, max_steps=steps, learn=False, record_path=True, episode=i
        ),
        n_episodes,
        max_steps,
    )
