"""Hand-written feedforward Q-network.

No autograd here: the network keeps the activations of its last forward
pass and `backward` pushes a single TD error back through them.

Topology is a list of layer widths, e.g. (4, 16, 16, 4):
    input -> ReLU hidden -> ReLU hidden -> linear output (one unit per action)

Weights are stored per layer as W[out, in] and b[out], float64.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np


class NeuralNetwork:
    """Small MLP with Xavier-style init and single-output backprop."""

    def __init__(
        self,
        layer_sizes: Sequence[int] = (4, 16, 16, 4),
        rng: np.random.Generator | None = None,
    ):
        sizes = tuple(int(n) for n in layer_sizes)
        if len(sizes) < 2:
            raise ValueError(
                f"Network needs at least an input and an output layer, got {list(layer_sizes)}"
            )
        if any(n <= 0 for n in sizes):
            raise ValueError(f"Layer widths must be positive, got {list(layer_sizes)}")

        self.layer_sizes = sizes
        self.rng = rng if rng is not None else np.random.default_rng()

        self.weights: List[np.ndarray] = []
        self.biases: List[np.ndarray] = []

        # Filled by forward(), consumed by backward().
        self.activations: List[np.ndarray] = []
        self.z_values: List[np.ndarray] = []

        self.initialize_weights()

    def initialize_weights(self) -> None:
        """Normal(0, sqrt(2 / (fan_in + fan_out))) weights, zero biases."""
        self.weights = []
        self.biases = []
        for fan_in, fan_out in zip(self.layer_sizes[:-1], self.layer_sizes[1:]):
            std = np.sqrt(2.0 / (fan_in + fan_out))
            self.weights.append(self.rng.normal(0.0, std, size=(fan_out, fan_in)))
            self.biases.append(np.zeros(fan_out, dtype=np.float64))
        self.activations = []
        self.z_values = []

    def forward(self, x) -> np.ndarray:
        """Return output-layer values for one input vector."""
        a = np.array(x, dtype=np.float64).reshape(-1)
        if a.shape[0] != self.layer_sizes[0]:
            raise ValueError(f"Expected input of width {self.layer_sizes[0]}, got {a.shape[0]}")

        activations = [a]
        z_values = []
        last = len(self.weights) - 1

        for layer, (w, b) in enumerate(zip(self.weights, self.biases)):
            z = w @ a + b
            z_values.append(z)
            a = z if layer == last else np.maximum(z, 0.0)
            activations.append(a)

        self.activations = activations
        self.z_values = z_values
        return a.copy()

    def backward(self, x, action_index: int, td_error: float, learning_rate: float) -> None:
        """Nudge the output unit for `action_index` toward its target by `td_error`.

        Only that output unit carries an error signal. The step is gradient
        ascent on `td_error`: W += lr * grad * a_prev, b += lr * grad.
        """
        x = np.asarray(x, dtype=np.float64).reshape(-1)
        if not self.activations or not np.array_equal(self.activations[0], x):
            self.forward(x)

        n_layers = len(self.weights)

        grad = np.zeros(self.layer_sizes[-1], dtype=np.float64)
        grad[int(action_index)] = td_error

        # All gradients come from the pre-update weights.
        grads = [grad]
        for layer in range(n_layers - 2, -1, -1):
            upstream = self.weights[layer + 1].T @ grads[0]
            grads.insert(0, np.where(self.z_values[layer] > 0, upstream, 0.0))

        for layer in range(n_layers):
            self.weights[layer] += learning_rate * np.outer(grads[layer], self.activations[layer])
            self.biases[layer] += learning_rate * grads[layer]

    def copy_weights_from(self, other: "NeuralNetwork") -> None:
        """Overwrite every parameter with an independent copy of `other`'s."""
        if other.layer_sizes != self.layer_sizes:
            raise ValueError(
                f"Cannot copy weights between topologies {list(other.layer_sizes)} "
                f"and {list(self.layer_sizes)}"
            )
        self.weights = [w.copy() for w in other.weights]
        self.biases = [b.copy() for b in other.biases]
        self.activations = []
        self.z_values = []

    def get_layer_count(self) -> int:
        return len(self.layer_sizes)

    def parameter_count(self) -> int:
        return int(sum(w.size + b.size for w, b in zip(self.weights, self.biases)))

    def get_weights(self) -> List[np.ndarray]:
        return [w.copy() for w in self.weights]

    def get_biases(self) -> List[np.ndarray]:
        return [b.copy() for b in self.biases]
