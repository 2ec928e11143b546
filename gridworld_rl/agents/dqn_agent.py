"""DQN agent.

Online network + target network + replay buffer, all owned by the agent.

Per environment step the caller does:
    agent.remember(...)      # store the transition
    agent.train_step()       # one pass over a sampled batch
    agent.increment_step()   # hard target sync every `target_update_steps`

and once per episode:
    agent.decay_epsilon()

The batch is processed one experience at a time: target-network forward on
s', online forward on s, then a single-unit backward on the action taken.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from ..environment.constants import ACTIONS, N_ACTIONS, Action
from ..environment.gridworld import Position
from ..training.encoder import StateEncoder
from ..training.network import NeuralNetwork
from ..training.replay import Experience, ReplayBuffer


class DQNAgent:
    """Deep Q-Network agent for the GridWorld."""

    def __init__(
        self,
        learning_rate: float = 0.001,
        discount_factor: float = 0.99,
        epsilon: float = 1.0,
        epsilon_decay: float = 0.995,
        epsilon_min: float = 0.01,
        batch_size: int = 32,
        replay_size: int = 10_000,
        target_update_steps: int = 100,
        layer_sizes: Sequence[int] = (4, 16, 16, 4),
        normalization: float = 8.0,
        rng: np.random.Generator | None = None,
    ):
        """Initialize the DQN agent.

        Args:
            learning_rate: Step size used by the network's backward pass.
            discount_factor: Gamma for the Bellman target.
            epsilon: Initial exploration rate.
            epsilon_decay: Multiplier applied by decay_epsilon().
            epsilon_min: Floor for epsilon.
            batch_size: Experiences sampled per train_step().
            replay_size: Replay buffer capacity.
            target_update_steps: Steps between hard target-network syncs.
            layer_sizes: Network topology; must start and end with 4.
            normalization: Divisor used when encoding positions.
            rng: Parent generator. Split into independent streams for
                weight init, replay sampling and exploration.
        """
        if int(batch_size) <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        if int(target_update_steps) <= 0:
            raise ValueError(f"target_update_steps must be positive, got {target_update_steps}")

        sizes = tuple(int(n) for n in layer_sizes)
        encoder = StateEncoder(normalization)
        if len(sizes) < 2 or sizes[0] != encoder.feature_dim or sizes[-1] != N_ACTIONS:
            raise ValueError(
                f"DQN topology must map {encoder.feature_dim} inputs to {N_ACTIONS} outputs, "
                f"got {list(layer_sizes)}"
            )

        self.learning_rate = learning_rate
        self.discount_factor = discount_factor
        self.epsilon = epsilon
        self.epsilon_decay = epsilon_decay
        self.epsilon_min = epsilon_min
        self.batch_size = int(batch_size)
        self.target_update_steps = int(target_update_steps)
        self.total_steps = 0

        parent = rng if rng is not None else np.random.default_rng()
        net_rng, replay_rng, explore_rng = parent.spawn(3)
        self.rng = explore_rng

        self.encoder = encoder
        self.q_net = NeuralNetwork(sizes, rng=net_rng)
        self.target_net = NeuralNetwork(sizes, rng=net_rng)
        self.target_net.copy_weights_from(self.q_net)
        self.replay = ReplayBuffer(replay_size, rng=replay_rng)

    def encode_state(self, position: Position, goal: Position) -> np.ndarray:
        return self.encoder.encode(position, goal)

    def predict(self, state: Position, goal: Position) -> np.ndarray:
        """Online-network Q-values for every action."""
        return self.q_net.forward(self.encode_state(state, goal))

    def best_action(self, state: Position, goal: Position) -> Tuple[Action, float]:
        """Greedy action and its Q-value. Ties go to the lowest action index."""
        q_values = self.predict(state, goal)
        best = 0
        for a in range(1, N_ACTIONS):
            if q_values[a] > q_values[best]:
                best = a
        return ACTIONS[best], float(q_values[best])

    def choose_action(self, state: Position, goal: Position) -> Action:
        """Epsilon-greedy over the online network's outputs."""
        if self.rng.random() < self.epsilon:
            return ACTIONS[int(self.rng.integers(N_ACTIONS))]
        return self.best_action(state, goal)[0]

    def remember(
        self,
        state: Position,
        action: Action,
        reward: float,
        next_state: Position,
        done: bool,
        goal: Position,
    ) -> None:
        self.replay.add(
            Experience(
                state=self.encode_state(state, goal),
                action=int(action),
                reward=float(reward),
                next_state=self.encode_state(next_state, goal),
                done=bool(done),
            )
        )

    def train_step(self) -> float | None:
        """Train on one sampled batch.

        Returns:
            Mean absolute TD error over the batch, or None when the buffer
            does not yet hold a full batch.
        """
        if not self.replay.can_sample(self.batch_size):
            return None

        batch = self.replay.sample(self.batch_size)

        total_abs_td = 0.0
        for exp in batch:
            # Bellman target from the target network.
            max_next_q = float(np.max(self.target_net.forward(exp.next_state)))
            if exp.done:
                target_q = exp.reward
            else:
                target_q = exp.reward + self.discount_factor * max_next_q

            current_q = float(self.q_net.forward(exp.state)[exp.action])
            td_error = target_q - current_q

            self.q_net.backward(exp.state, exp.action, td_error, self.learning_rate)
            total_abs_td += abs(td_error)

        return total_abs_td / len(batch)

    def increment_step(self) -> bool:
        """Advance the global step counter.

        Returns:
            True when this step triggered a target-network sync.
        """
        self.total_steps += 1
        if self.total_steps % self.target_update_steps == 0:
            self.target_net.copy_weights_from(self.q_net)
            return True
        return False

    def decay_epsilon(self):
        """Decay the exploration rate, never below the floor."""
        self.epsilon = max(self.epsilon_min, self.epsilon * self.epsilon_decay)

    def get_epsilon(self) -> float:
        return self.epsilon

    def set_epsilon(self, epsilon: float):
        self.epsilon = epsilon

    def get_buffer_size(self) -> int:
        return len(self.replay)
