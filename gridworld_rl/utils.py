"""
Utility functions for training and evaluation.
"""

from __future__ import annotations

from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np


def moving_average(values: Sequence[float], window: int = 100) -> np.ndarray:
    """Trailing moving average; empty if there are fewer than `window` values."""
    if window <= 0:
        raise ValueError(f"Window must be positive, got {window}")
    if len(values) < window:
        return np.array([], dtype=np.float64)
    return np.convolve(np.asarray(values, dtype=np.float64), np.ones(window) / window, mode="valid")


def plot_training_stats(
    rewards: List[float],
    lengths: List[float],
    window: int = 100,
    save_path: str | None = None,
    title: str = "Training",
):
    """
    Plot training statistics with moving average.

    Args:
        rewards: List of episode rewards.
        lengths: List of episode lengths.
        window: Window size for moving average.
        save_path: Optional path to save the plot.
        title: Prefix for the subplot titles.
    """
    fig, axes = plt.subplots(2, 1, figsize=(10, 8))

    # Plot rewards
    ax = axes[0]
    ax.plot(rewards, alpha=0.3, color="blue", label="Episode Reward")
    avg = moving_average(rewards, window)
    if avg.size:
        ax.plot(range(window - 1, len(rewards)), avg, color="red", label=f"Moving Avg ({window})")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Reward")
    ax.set_title(f"{title} Rewards")
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Plot episode lengths
    ax = axes[1]
    ax.plot(lengths, alpha=0.3, color="green", label="Episode Length")
    avg = moving_average(lengths, window)
    if avg.size:
        ax.plot(range(window - 1, len(lengths)), avg, color="red", label=f"Moving Avg ({window})")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Steps")
    ax.set_title(f"{title} Episode Lengths")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Plot saved to {save_path}")
    else:
        plt.show()

    plt.close(fig)


def print_episode_info(
    episode: int,
    avg_reward: float,
    length: int,
    epsilon: float,
    buffer_size: int | None = None,
):
    """Print formatted episode information."""
    line = (
        f"Episode {episode:5d} | "
        f"Avg Reward: {avg_reward:7.3f} | "
        f"Steps: {length:3d} | "
        f"Epsilon: {epsilon:.4f}"
    )
    if buffer_size is not None:
        line += f" | Buffer: {buffer_size}"
    print(line)
