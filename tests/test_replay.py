"""Unit tests for the replay buffer."""

import unittest

import numpy as np

from gridworld_rl.training.replay import Experience, ReplayBuffer


def make_experience(i: int) -> Experience:
    return Experience(
        state=np.full(4, i, dtype=np.float64),
        action=i % 4,
        reward=float(i),
        next_state=np.full(4, i + 1, dtype=np.float64),
        done=False,
    )


class TestReplayStorage(unittest.TestCase):
    """Capacity bound and ring cursor."""

    def test_length_never_exceeds_capacity(self):
        buffer = ReplayBuffer(3)
        for i in range(10):
            buffer.add(make_experience(i))
            self.assertLessEqual(len(buffer), 3)
        self.assertEqual(len(buffer), 3)

    def test_cursor_advances_on_every_add(self):
        buffer = ReplayBuffer(3)
        positions = []
        for i in range(7):
            buffer.add(make_experience(i))
            positions.append(buffer.position)
        self.assertEqual(positions, [1, 2, 0, 1, 2, 0, 1])

    def test_overwrite_follows_cursor(self):
        buffer = ReplayBuffer(3)
        for i in range(5):
            buffer.add(make_experience(i))
        self.assertEqual([exp.reward for exp in buffer._buf], [3.0, 4.0, 2.0])

    def test_invalid_capacity_raises(self):
        for bad in (0, -1):
            with self.subTest(capacity=bad):
                with self.assertRaises(ValueError):
                    ReplayBuffer(bad)


class TestReplaySampling(unittest.TestCase):
    """Sampling preconditions and with-replacement draws."""

    def test_can_sample(self):
        buffer = ReplayBuffer(10)
        for i in range(4):
            self.assertFalse(buffer.can_sample(5))
            buffer.add(make_experience(i))
        buffer.add(make_experience(4))
        self.assertTrue(buffer.can_sample(5))

    def test_sample_rejects_undersized_buffer(self):
        buffer = ReplayBuffer(10)
        for i in range(3):
            buffer.add(make_experience(i))
        with self.assertRaises(ValueError):
            buffer.sample(5)
        with self.assertRaises(ValueError):
            buffer.sample(0)

    def test_sample_is_with_replacement(self):
        buffer = ReplayBuffer(20, rng=np.random.default_rng(0))
        for i in range(20):
            buffer.add(make_experience(i))

        saw_duplicate = False
        for _ in range(5):
            batch = buffer.sample(20)
            self.assertEqual(len(batch), 20)
            rewards = [exp.reward for exp in batch]
            for r in rewards:
                self.assertIn(r, [float(i) for i in range(20)])
            if len(set(rewards)) < len(rewards):
                saw_duplicate = True
        self.assertTrue(saw_duplicate)

    def test_seeded_buffers_sample_identically(self):
        a = ReplayBuffer(50, rng=np.random.default_rng(11))
        b = ReplayBuffer(50, rng=np.random.default_rng(11))
        for i in range(40):
            a.add(make_experience(i))
            b.add(make_experience(i))
        self.assertEqual(
            [exp.reward for exp in a.sample(16)],
            [exp.reward for exp in b.sample(16)],
        )


if __name__ == "__main__":
    unittest.main()
