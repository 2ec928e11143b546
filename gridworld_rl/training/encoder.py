"""State encoding for the DQN.

The network sees four floats: agent x, agent y, goal x, goal y, each divided
by a fixed normalization constant.

The constant is chosen once, at construction. It is not read back from the
environment on every call, so an encoder built for an 8x8 grid will scale
positions on a 12x12 grid past 1.0. Build a new encoder (or pass a matching
`normalization`) when the grid size changes.
"""

from __future__ import annotations

import numpy as np

from ..environment.gridworld import Position


class StateEncoder:
    """Encodes (position, goal) into a flat float64 feature vector."""

    feature_dim = 4

    def __init__(self, normalization: float = 8.0):
        normalization = float(normalization)
        if normalization <= 0.0:
            raise ValueError(f"Normalization constant must be positive, got {normalization}")
        self.normalization = normalization

    def encode(self, position: Position, goal: Position) -> np.ndarray:
        """Return a 1D float64 vector of length `feature_dim`."""
        return np.array(
            [position[0], position[1], goal[0], goal[1]],
            dtype=np.float64,
        ) / self.normalization
