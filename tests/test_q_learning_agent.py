"""Unit tests for the tabular Q-learning agent."""

import unittest

import numpy as np

from gridworld_rl.agents import OPTIMISTIC_INIT, QLearningAgent
from gridworld_rl.environment import ACTIONS, Action, Position


class TestQTable(unittest.TestCase):
    """Optimistic default and greedy selection."""

    def setUp(self):
        self.agent = QLearningAgent(rng=np.random.default_rng(0))

    def test_unseen_pairs_read_optimistic_default(self):
        self.assertEqual(OPTIMISTIC_INIT, 1.0)
        for action in ACTIONS:
            self.assertEqual(self.agent.get_value(Position(3, 4), action), 1.0)

    def test_reads_never_insert(self):
        state = Position(2, 2)
        self.agent.get_value(state, Action.UP)
        self.agent.best_action(state)
        self.agent.max_value(state)
        self.agent.get_q_values_for_state(state)
        self.agent.set_epsilon(0.0)
        self.agent.choose_action(state)
        self.assertEqual(self.agent.get_q_table_size(), 0)

    def test_ties_go_to_lowest_index(self):
        state = Position(0, 0)
        self.assertEqual(self.agent.best_action(state), (Action.UP, 1.0))

        self.agent.q_table[(state, Action.UP)] = 0.5
        self.assertEqual(self.agent.best_action(state)[0], Action.RIGHT)

        self.agent.q_table[(state, Action.LEFT)] = 2.0
        self.assertEqual(self.agent.best_action(state), (Action.LEFT, 2.0))

    def test_plain_tuples_are_accepted_as_states(self):
        self.agent.update((0, 0), 1, -0.01, (1, 0))
        self.assertEqual(self.agent.get_q_table_size(), 1)
        self.assertLess(self.agent.get_value(Position(0, 0), Action.RIGHT), 1.0)

    def test_q_values_for_state(self):
        values = self.agent.get_q_values_for_state(Position(1, 1))
        self.assertEqual(values.shape, (4,))
        np.testing.assert_array_equal(values, np.ones(4))


class TestQUpdate(unittest.TestCase):
    """Bellman update behaviour."""

    def test_single_update_value(self):
        agent = QLearningAgent(learning_rate=0.1, discount_factor=0.99)
        delta = agent.update(Position(0, 0), Action.RIGHT, -0.01, Position(1, 0))
        # target = -0.01 + 0.99 * 1.0 = 0.98; Q = 1.0 + 0.1 * (0.98 - 1.0)
        self.assertAlmostEqual(agent.get_value(Position(0, 0), Action.RIGHT), 0.998)
        self.assertAlmostEqual(delta, 0.002)

    def test_repeated_transition_converges_monotonically(self):
        agent = QLearningAgent(learning_rate=0.1, discount_factor=0.99, epsilon=0.0)
        state, next_state = Position(0, 0), Position(1, 0)
        target = -0.01 + 0.99 * 1.0

        previous = agent.get_value(state, Action.RIGHT)
        for _ in range(300):
            agent.update(state, Action.RIGHT, -0.01, next_state)
            current = agent.get_value(state, Action.RIGHT)
            self.assertLessEqual(current, previous)
            self.assertGreaterEqual(current, target - 1e-12)
            previous = current

        self.assertAlmostEqual(previous, target, places=6)
        self.assertEqual(agent.get_q_table_size(), 1)

    def test_goal_transition_bootstraps_from_goal_default(self):
        agent = QLearningAgent(learning_rate=1.0, discount_factor=0.99)
        agent.update(Position(6, 7), Action.RIGHT, 1.0, Position(7, 7))
        self.assertAlmostEqual(agent.get_value(Position(6, 7), Action.RIGHT), 1.99)


class TestExploration(unittest.TestCase):
    """Epsilon-greedy and decay."""

    def test_decay_stops_at_floor(self):
        agent = QLearningAgent(epsilon=0.5, epsilon_decay=0.995, epsilon_min=0.01)
        previous = agent.get_epsilon()
        for _ in range(2000):
            agent.decay_epsilon()
            self.assertLessEqual(agent.get_epsilon(), previous)
            self.assertGreaterEqual(agent.get_epsilon(), 0.01)
            previous = agent.get_epsilon()
        self.assertEqual(agent.get_epsilon(), 0.01)

    def test_decay_with_explicit_arguments(self):
        agent = QLearningAgent(epsilon=0.5)
        agent.decay_epsilon(0.5, 0.2)
        self.assertAlmostEqual(agent.get_epsilon(), 0.25)
        agent.decay_epsilon(0.5, 0.2)
        self.assertAlmostEqual(agent.get_epsilon(), 0.2)

    def test_greedy_when_epsilon_zero(self):
        agent = QLearningAgent(epsilon=0.0, rng=np.random.default_rng(1))
        state = Position(4, 4)
        agent.q_table[(state, Action.DOWN)] = 5.0
        for _ in range(20):
            self.assertEqual(agent.choose_action(state), Action.DOWN)

    def test_random_actions_are_valid(self):
        agent = QLearningAgent(epsilon=1.0, rng=np.random.default_rng(2))
        seen = {agent.choose_action(Position(0, 0)) for _ in range(200)}
        self.assertEqual(seen, set(ACTIONS))

    def test_seeded_agents_make_identical_choices(self):
        a = QLearningAgent(epsilon=0.5, rng=np.random.default_rng(42))
        b = QLearningAgent(epsilon=0.5, rng=np.random.default_rng(42))
        states = [Position(i % 8, i // 8) for i in range(64)]
        self.assertEqual(
            [a.choose_action(s) for s in states],
            [b.choose_action(s) for s in states],
        )


if __name__ == "__main__":
    unittest.main()
