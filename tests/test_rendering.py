"""Tests for text rendering and the console helpers in utils."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import matplotlib

matplotlib.use("Agg")

import numpy as np

from gridworld_rl.environment import Action, Position
from gridworld_rl.environment.rendering import (
    render_path,
    render_policy,
    render_text,
    render_values,
)
from gridworld_rl.utils import moving_average, plot_training_stats, print_episode_info


class TestRendering(unittest.TestCase):
    """Grid formatting."""

    def test_policy_arrows_and_goal(self):
        text = render_policy(lambda pos: Action.RIGHT, 2, Position(1, 1))
        self.assertEqual(text, "> >\n> G")

    def test_policy_uses_every_arrow(self):
        arrows = {Position(0, 0): Action.UP, Position(1, 0): Action.DOWN, Position(0, 1): Action.LEFT}
        text = render_policy(arrows.__getitem__, 2, Position(1, 1))
        self.assertEqual(text, "^ v\n< G")

    def test_value_grid_format(self):
        text = render_values(lambda pos: pos.x - 0.5 * pos.y, 2)
        self.assertEqual(text, "  0.00   1.00\n -0.50   0.50")

    def test_path(self):
        path = [Position(0, 0), Position(1, 0), Position(1, 1)]
        self.assertEqual(render_path(path), "(0,0) -> (1,0) -> (1,1)")

    def test_text_grid(self):
        self.assertEqual(render_text(2, Position(1, 0), Position(1, 1)), " . A\n . G")


class TestUtils(unittest.TestCase):
    """Moving average, progress line and plotting."""

    def test_moving_average(self):
        np.testing.assert_allclose(moving_average([1, 2, 3, 4], window=2), [1.5, 2.5, 3.5])
        self.assertEqual(moving_average([1, 2], window=5).size, 0)
        with self.assertRaises(ValueError):
            moving_average([1, 2], window=0)

    def test_print_episode_info(self):
        out = io.StringIO()
        with redirect_stdout(out):
            print_episode_info(100, 0.5, 14, 0.25)
            print_episode_info(200, -0.123, 200, 1.0, buffer_size=320)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "Episode   100 | Avg Reward:   0.500 | Steps:  14 | Epsilon: 0.2500")
        self.assertTrue(lines[1].endswith("| Buffer: 320"))

    def test_plot_saved_to_file(self):
        rewards = list(np.linspace(-2.0, 0.87, 150))
        lengths = list(np.linspace(200, 14, 150))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "curves.png")
            with redirect_stdout(io.StringIO()):
                plot_training_stats(rewards, lengths, window=100, save_path=path)
            self.assertTrue(os.path.exists(path))


if __name__ == "__main__":
    unittest.main()
