"""
Tabular Q-Learning Agent
========================
A simple Q-learning implementation using a dictionary-based Q-table.

Q-learning update rule:
    Q(s, a) = Q(s, a) + alpha * [reward + gamma * max(Q(s', a')) - Q(s, a)]

Unseen (state, action) pairs read as 1.0 rather than 0 (optimistic
initialization): an untried action looks at least as good as reaching the
goal until it has been updated.
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from ..environment.constants import ACTIONS, N_ACTIONS, Action
from ..environment.gridworld import Position

OPTIMISTIC_INIT: float = 1.0


class QLearningAgent:
    """
    Tabular Q-Learning Agent.

    Uses a dictionary to store Q-values for (position, action) pairs.
    Reads never insert: a missing key resolves to OPTIMISTIC_INIT.
    """

    def __init__(
        self,
        learning_rate: float = 0.1,
        discount_factor: float = 0.99,
        epsilon: float = 0.5,
        epsilon_decay: float = 0.995,
        epsilon_min: float = 0.01,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize the Q-learning agent.

        Args:
            learning_rate: Alpha - how quickly to update Q-values.
            discount_factor: Gamma - importance of future rewards.
            epsilon: Initial exploration rate for epsilon-greedy policy.
            epsilon_decay: Factor to decay epsilon after each episode.
            epsilon_min: Minimum value for epsilon.
            rng: Random generator used for exploration.
        """
        self.learning_rate = learning_rate
        self.discount_factor = discount_factor
        self.epsilon = epsilon
        self.epsilon_decay = epsilon_decay
        self.epsilon_min = epsilon_min
        self.rng = rng if rng is not None else np.random.default_rng()

        self.q_table: Dict[Tuple[Position, Action], float] = {}

    def get_value(self, state: Position, action: Action) -> float:
        """Stored Q-value, or the optimistic default if never updated."""
        return self.q_table.get((Position(*state), Action(action)), OPTIMISTIC_INIT)

    def choose_action(self, state: Position) -> Action:
        """
        Select an action using epsilon-greedy policy.

        Args:
            state: Current position.

        Returns:
            Selected action.
        """
        if self.rng.random() < self.epsilon:
            # Explore: random action
            return ACTIONS[int(self.rng.integers(N_ACTIONS))]
        # Exploit: action with highest Q-value
        return self.best_action(state)[0]

    def best_action(self, state: Position) -> Tuple[Action, float]:
        """Greedy action and its value. Ties go to the lowest action index."""
        best = ACTIONS[0]
        best_q = self.get_value(state, best)
        for action in ACTIONS[1:]:
            q = self.get_value(state, action)
            if q > best_q:
                best, best_q = action, q
        return best, best_q

    def max_value(self, state: Position) -> float:
        return max(self.get_value(state, a) for a in ACTIONS)

    def update(
        self,
        state: Position,
        action: Action,
        reward: float,
        next_state: Position,
    ) -> float:
        """
        Update Q-value using the Q-learning update rule.

        There is no terminal cut-off: the goal's own entries stay at the
        optimistic default and are still bootstrapped from.

        Returns:
            The Q-value change (for monitoring convergence).
        """
        current_q = self.get_value(state, action)
        target_q = reward + self.discount_factor * self.max_value(next_state)

        new_q = current_q + self.learning_rate * (target_q - current_q)
        self.q_table[(Position(*state), Action(action))] = new_q

        return abs(new_q - current_q)

    def decay_epsilon(
        self,
        decay_rate: float | None = None,
        epsilon_min: float | None = None,
    ):
        """Decay the exploration rate, never below the floor."""
        rate = self.epsilon_decay if decay_rate is None else decay_rate
        floor = self.epsilon_min if epsilon_min is None else epsilon_min
        self.epsilon = max(floor, self.epsilon * rate)

    def get_epsilon(self) -> float:
        return self.epsilon

    def set_epsilon(self, epsilon: float):
        self.epsilon = epsilon

    def get_q_table_size(self) -> int:
        """Return the number of state-action pairs in Q-table."""
        return len(self.q_table)

    def get_q_values_for_state(self, state: Position) -> np.ndarray:
        """Get all Q-values for a given state."""
        return np.array([self.get_value(state, a) for a in ACTIONS])
