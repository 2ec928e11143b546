"""Tests for the Gymnasium adapter."""

import unittest

import numpy as np
from gymnasium import spaces
from gymnasium.utils.env_checker import check_env

from gridworld_rl.environment import Action, GridWorldEnv


class TestGridWorldEnv(unittest.TestCase):
    """API shapes, termination and truncation."""

    def test_spaces(self):
        env = GridWorldEnv(size=8)
        self.assertIsInstance(env.action_space, spaces.Discrete)
        self.assertEqual(env.action_space.n, 4)
        self.assertEqual(env.observation_space.shape, (2,))
        self.assertEqual(int(env.observation_space.high[0]), 7)

    def test_reset(self):
        env = GridWorldEnv(size=8)
        obs, info = env.reset(seed=0)
        np.testing.assert_array_equal(obs, [0, 0])
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(info, {"steps": 0, "dist_to_goal": 14})

    def test_step(self):
        env = GridWorldEnv(size=8)
        env.reset()
        obs, reward, terminated, truncated, info = env.step(int(Action.RIGHT))
        np.testing.assert_array_equal(obs, [1, 0])
        self.assertIsInstance(reward, float)
        self.assertAlmostEqual(reward, -0.01)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info["steps"], 1)
        self.assertEqual(info["dist_to_goal"], 13)

    def test_terminates_at_goal(self):
        env = GridWorldEnv(size=2)
        env.reset()
        env.step(int(Action.RIGHT))
        _, reward, terminated, truncated, _ = env.step(int(Action.DOWN))
        self.assertEqual(reward, 1.0)
        self.assertTrue(terminated)
        self.assertFalse(truncated)

    def test_truncates_at_step_ceiling(self):
        env = GridWorldEnv(size=8, max_steps=3)
        env.reset()
        flags = [env.step(int(Action.LEFT))[3] for _ in range(3)]
        self.assertEqual(flags, [False, False, True])

        env.reset()
        self.assertFalse(env.step(int(Action.LEFT))[3])

    def test_invalid_action(self):
        env = GridWorldEnv()
        env.reset()
        with self.assertRaises(AssertionError):
            env.step(4)

    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            GridWorldEnv(max_steps=0)
        with self.assertRaises(ValueError):
            GridWorldEnv(render_mode="human")
        with self.assertRaises(ValueError):
            GridWorldEnv(size=0)

    def test_passes_gymnasium_env_checker(self):
        env = GridWorldEnv(size=4, max_steps=20)
        check_env(env, skip_render_check=True)

    def test_random_rollout_under_gymnasium_conventions(self):
        env = GridWorldEnv(size=4, max_steps=30)
        env.action_space.seed(0)
        obs, _ = env.reset(seed=0)
        for _ in range(30):
            obs, reward, terminated, truncated, _ = env.step(env.action_space.sample())
            self.assertTrue(env.observation_space.contains(obs))
            if terminated or truncated:
                break
        self.assertTrue(terminated or truncated)

    def test_ansi_render(self):
        env = GridWorldEnv(size=3, render_mode="ansi")
        env.reset()
        self.assertEqual(env.render(), " A . .\n . . .\n . . G")
        self.assertIsNone(GridWorldEnv(size=3).render())


if __name__ == "__main__":
    unittest.main()
