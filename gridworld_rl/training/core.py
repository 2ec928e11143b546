"""Core training loops (tabular Q-learning and DQN).

This module contains *only* the episode protocol and the outer episode loop.
Agents own their learning state; the environment owns the grid.

Per step:
    choose action -> env.step -> learn -> accumulate reward -> stop if done

Per episode:
    decay epsilon once, push the episode total into a rolling window (last 100)
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from ..agents.dqn_agent import DQNAgent
from ..agents.q_learning_agent import QLearningAgent
from ..config import DQN_CONFIG, ENV_CONFIG, QLEARNING_CONFIG, TRAIN_CONFIG
from ..environment.gridworld import GridWorld, Position
from ..utils import print_episode_info


@dataclass
class EpisodeStats:
    """Outcome of one episode."""

    episode: int
    reward: float
    steps: int
    reached_goal: bool
    epsilon: float
    moving_avg_reward: float = 0.0
    path: List[Position] = field(default_factory=list)


@dataclass
class TrainingHistory:
    """Per-episode statistics for a whole training run."""

    episodes: List[EpisodeStats] = field(default_factory=list)
    final_epsilon: float = 0.0
    elapsed: float = 0.0

    @property
    def rewards(self) -> List[float]:
        return [ep.reward for ep in self.episodes]

    @property
    def lengths(self) -> List[int]:
        return [ep.steps for ep in self.episodes]

    @property
    def success_rate(self) -> float:
        if not self.episodes:
            return 0.0
        return sum(ep.reached_goal for ep in self.episodes) / len(self.episodes)

    def moving_average(self, window: int = 100) -> float:
        """Mean reward over the last `window` episodes (0.0 if none)."""
        recent = self.rewards[-int(window):]
        return float(np.mean(recent)) if recent else 0.0


# ─────────────────────────────────────────────────────────────────────────────
# Single episodes
# ─────────────────────────────────────────────────────────────────────────────

def run_q_learning_episode(
    agent: QLearningAgent,
    env: GridWorld,
    max_steps: int = 200,
    learn: bool = True,
    *,
    record_path: bool = False,
    episode: int = 0,
) -> EpisodeStats:
    """Play one episode with the tabular agent. Does not decay epsilon."""
    state = env.reset()
    path = [state] if record_path else []
    ep_reward = 0.0
    steps = 0
    done = False
    epsilon_used = agent.get_epsilon()

    for _ in range(int(max_steps)):
        action = agent.choose_action(state)
        next_state, reward, done = env.step(action)

        if learn:
            agent.update(state, action, reward, next_state)

        state = next_state
        ep_reward += reward
        steps += 1
        if record_path:
            path.append(state)

        if done:
            break

    return EpisodeStats(
        episode=episode,
        reward=ep_reward,
        steps=steps,
        reached_goal=bool(done),
        epsilon=epsilon_used,
        path=path,
    )


def run_dqn_episode(
    agent: DQNAgent,
    env: GridWorld,
    max_steps: int = 200,
    learn: bool = True,
    *,
    record_path: bool = False,
    episode: int = 0,
    on_sync: Optional[Callable[[int], None]] = None,
) -> EpisodeStats:
    """Play one episode with the DQN agent. Does not decay epsilon.

    `on_sync(total_steps)` is called whenever a step triggers a target sync.
    """
    state = env.reset()
    goal = env.get_goal()
    path = [state] if record_path else []
    ep_reward = 0.0
    steps = 0
    done = False
    epsilon_used = agent.get_epsilon()

    for _ in range(int(max_steps)):
        action = agent.choose_action(state, goal)
        next_state, reward, done = env.step(action)

        if learn:
            agent.remember(state, action, reward, next_state, done, goal)
            agent.train_step()
            if agent.increment_step() and on_sync is not None:
                on_sync(agent.total_steps)

        state = next_state
        ep_reward += reward
        steps += 1
        if record_path:
            path.append(state)

        if done:
            break

    return EpisodeStats(
        episode=episode,
        reward=ep_reward,
        steps=steps,
        reached_goal=bool(done),
        epsilon=epsilon_used,
        path=path,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Training runs
# ─────────────────────────────────────────────────────────────────────────────

def _finish_episode(
    stats: EpisodeStats,
    recent_rewards: deque,
    history: TrainingHistory,
    on_episode: Optional[Callable[[EpisodeStats], None]],
) -> None:
    recent_rewards.append(stats.reward)
    stats.moving_avg_reward = float(np.mean(recent_rewards))
    history.episodes.append(stats)
    if on_episode is not None:
        on_episode(stats)


def train_q_learning(
    agent: Optional[QLearningAgent] = None,
    env: Optional[GridWorld] = None,
    n_episodes: int = TRAIN_CONFIG["qlearning_episodes"],
    max_steps: int = TRAIN_CONFIG["max_steps"],
    log_interval: int = TRAIN_CONFIG["log_interval"],
    verbose: bool = True,
    on_episode: Optional[Callable[[EpisodeStats], None]] = None,
    *,
    rng: np.random.Generator | None = None,
) -> Tuple[QLearningAgent, TrainingHistory]:
    """Train a tabular agent for `n_episodes`.

    A default agent (QLEARNING_CONFIG) and grid (ENV_CONFIG) are created when
    none are passed; `rng` seeds the default agent only.

    Returns:
        (agent, history)
    """
    if env is None:
        env = GridWorld(ENV_CONFIG["size"])
    if agent is None:
        agent = QLearningAgent(**QLEARNING_CONFIG, rng=rng)

    if verbose:
        goal = env.get_goal()
        size = env.get_grid_size()
        print(f"Training Q-Learning agent on {size}x{size} GridWorld...")
        print(f"Goal: Reach position ({goal.x},{goal.y}) from (0,0)")
        print("Hyperparameters:")
        print(f"  - Learning rate (alpha): {agent.learning_rate}")
        print(f"  - Discount factor (gamma): {agent.discount_factor}")
        print(f"  - Initial exploration (epsilon): {agent.get_epsilon()}\n")

    history = TrainingHistory()
    recent_rewards: deque = deque(maxlen=TRAIN_CONFIG["reward_window"])
    start_time = time.time()

    for ep in range(int(n_episodes)):
        stats = run_q_learning_episode(agent, env, max_steps=max_steps, episode=ep)
        agent.decay_epsilon()
        _finish_episode(stats, recent_rewards, history, on_episode)

        if verbose and log_interval > 0 and ep % int(log_interval) == 0:
            print_episode_info(
                ep,
                stats.moving_avg_reward,
                stats.steps,
                agent.get_epsilon(),
            )

    history.final_epsilon = agent.get_epsilon()
    history.elapsed = float(time.time() - start_time)

    if verbose:
        print("\n=== Q-Learning Training Complete ===")

    return agent, history


def train_dqn(
    agent: Optional[DQNAgent] = None,
    env: Optional[GridWorld] = None,
    n_episodes: int = TRAIN_CONFIG["dqn_episodes"],
    max_steps: int = TRAIN_CONFIG["max_steps"],
    log_interval: int = TRAIN_CONFIG["log_interval"],
    verbose: bool = True,
    on_episode: Optional[Callable[[EpisodeStats], None]] = None,
    *,
    rng: np.random.Generator | None = None,
) -> Tuple[DQNAgent, TrainingHistory]:
    """Train a DQN agent for `n_episodes`.

    A default agent (DQN_CONFIG) and grid (ENV_CONFIG) are created when none
    are passed; `rng` seeds the default agent only.

    Returns:
        (agent, history)
    """
    if env is None:
        env = GridWorld(ENV_CONFIG["size"])
    if agent is None:
        agent = DQNAgent(**DQN_CONFIG, rng=rng)

    if verbose:
        goal = env.get_goal()
        size = env.get_grid_size()
        topology = " -> ".join(str(n) for n in agent.q_net.layer_sizes)
        print(f"Training DQN agent on {size}x{size} GridWorld...")
        print(f"Goal: Reach position ({goal.x},{goal.y}) from (0,0)")
        print(f"Network: {topology}")
        print("Hyperparameters:")
        print(f"  - Learning rate: {agent.learning_rate}")
        print(f"  - Discount factor (gamma): {agent.discount_factor}")
        print(f"  - Initial exploration (epsilon): {agent.get_epsilon()}")
        print(f"  - Batch size: {agent.batch_size}")
        print(f"  - Replay buffer: {agent.replay.capacity}")
        print(f"  - Target update frequency: {agent.target_update_steps} steps\n")

    def report_sync(total_steps: int) -> None:
        if total_steps % TRAIN_CONFIG["sync_log_interval"] == 0:
            print(f"  [Target network updated at step {total_steps}]")

    history = TrainingHistory()
    recent_rewards: deque = deque(maxlen=TRAIN_CONFIG["reward_window"])
    start_time = time.time()

    for ep in range(int(n_episodes)):
        stats = run_dqn_episode(
            agent,
            env,
            max_steps=max_steps,
            episode=ep,
            on_sync=report_sync if verbose else None,
        )
        agent.decay_epsilon()
        _finish_episode(stats, recent_rewards, history, on_episode)

        if verbose and log_interval > 0 and ep % int(log_interval) == 0:
            print_episode_info(
                ep,
                stats.moving_avg_reward,
                stats.steps,
                agent.get_epsilon(),
                buffer_size=agent.get_buffer_size(),
            )

    history.final_epsilon = agent.get_epsilon()
    history.elapsed = float(time.time() - start_time)

    if verbose:
        print("\n=== DQN Training Complete ===")

    return agent, history
