"""Replay buffer.

Stored transitions hold the *encoded* states (float64 vectors), not raw grid
positions, so the DQN update can feed them straight into the network.

Eviction: a write cursor advances on every add (modulo capacity). While the
buffer is filling we append; once full we overwrite whatever sits under the
cursor.

Sampling draws independent uniform indices, so one batch can contain the same
transition more than once (sampling with replacement).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass(frozen=True, slots=True)
class Experience:
    """A single experience tuple."""

    state: np.ndarray
    action: int
    reward: float
    next_state: np.ndarray
    done: bool


class ReplayBuffer:
    """Fixed-size circular replay buffer."""

    def __init__(self, capacity: int, rng: np.random.Generator | None = None):
        capacity = int(capacity)
        if capacity <= 0:
            raise ValueError(f"Replay buffer capacity must be positive, got {capacity}")

        self.capacity = capacity
        self.position = 0
        self.rng = rng if rng is not None else np.random.default_rng()
        self._buf: List[Experience] = []

    def add(self, exp: Experience) -> None:
        if len(self._buf) < self.capacity:
            self._buf.append(exp)
        else:
            self._buf[self.position] = exp
        self.position = (self.position + 1) % self.capacity

    def sample(self, batch_size: int) -> List[Experience]:
        """Uniform random sample, with replacement."""
        batch_size = int(batch_size)
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        if not self.can_sample(batch_size):
            raise ValueError(
                f"Cannot sample {batch_size} experiences from a buffer holding {len(self._buf)}"
            )

        idx = self.rng.integers(0, len(self._buf), size=batch_size)
        return [self._buf[i] for i in idx]

    def can_sample(self, batch_size: int) -> bool:
        return len(self._buf) >= batch_size

    def __len__(self) -> int:
        return len(self._buf)
