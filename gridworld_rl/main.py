"""
Main entry point for GridWorld Q-Learning vs DQN.
=================================================

Commands:
    qlearning - Train the tabular agent, show its policy, run greedy tests
    dqn       - Train the DQN agent, show its policy, run greedy tests
    compare   - Train both and print a side-by-side summary

Usage:
    python -m gridworld_rl                      # Interactive menu (default)
    python -m gridworld_rl qlearning --seed 0
    python -m gridworld_rl dqn --episodes 500 --plot dqn.png
    python -m gridworld_rl compare
    python -m gridworld_rl --help
"""

from __future__ import annotations

import argparse

import numpy as np

from .agents import DQNAgent, QLearningAgent
from .config import DQN_CONFIG, ENV_CONFIG, EVAL_CONFIG, QLEARNING_CONFIG, TRAIN_CONFIG
from .environment import GridWorld
from .environment.rendering import render_path, render_policy, render_values
from .training.core import TrainingHistory, train_dqn, train_q_learning
from .training.eval import evaluate_dqn, evaluate_q_learning
from .utils import plot_training_stats


def _banner(title: str):
    print("\n" + "=" * 40)
    print(f"  {title}")
    print("=" * 40 + "\n")


def _print_test_results(label: str, results: dict, n_episodes: int):
    print(f"\n\nTesting {label} policy (greedy, no exploration):")
    for ep in results["episodes"]:
        outcome = f"GOAL! ({ep.steps} steps)" if ep.reached_goal else "(failed)"
        print(f"Episode {ep.episode}: {render_path(ep.path)} {outcome}")

    line = f"\nSuccess rate: {results['successes']}/{n_episodes}"
    if results["successes"] > 0:
        line += f" | Avg steps: {int(results['avg_steps'])}"
    print(line)


def _maybe_plot(history: TrainingHistory, path: str | None, title: str):
    if path:
        plot_training_stats(
            history.rewards,
            history.lengths,
            window=TRAIN_CONFIG["reward_window"],
            save_path=path,
            title=title,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Runs
# ─────────────────────────────────────────────────────────────────────────────

def run_qlearning(
    *,
    episodes: int,
    grid_size: int,
    rng: np.random.Generator,
    log_interval: int,
    test_episodes: int,
) -> tuple[QLearningAgent, TrainingHistory, dict]:
    env = GridWorld(grid_size)
    agent = QLearningAgent(**QLEARNING_CONFIG, rng=rng)
    agent, history = train_q_learning(
        agent, env, n_episodes=episodes, log_interval=log_interval
    )

    print(f"\nQ-table size: {agent.get_q_table_size()} state-action pairs")
    print("\nLearned Policy (best action at each position):")
    print(render_policy(lambda pos: agent.best_action(pos)[0], grid_size, env.get_goal()))
    print("\nQ-Values at each position (showing max Q):")
    print(render_values(agent.max_value, grid_size))

    results = evaluate_q_learning(
        agent, env, n_episodes=test_episodes, max_steps=EVAL_CONFIG["max_steps"]
    )
    _print_test_results("Q-Learning", results, test_episodes)
    return agent, history, results


def run_dqn(
    *,
    episodes: int,
    grid_size: int,
    rng: np.random.Generator,
    log_interval: int,
    test_episodes: int,
    batch_size: int = DQN_CONFIG["batch_size"],
    replay_size: int = DQN_CONFIG["replay_size"],
    target_update_steps: int = DQN_CONFIG["target_update_steps"],
    lr: float = DQN_CONFIG["learning_rate"],
) -> tuple[DQNAgent, TrainingHistory, dict]:
    env = GridWorld(grid_size)
    agent_cfg = dict(DQN_CONFIG)
    agent_cfg.update(
        learning_rate=lr,
        batch_size=batch_size,
        replay_size=replay_size,
        target_update_steps=target_update_steps,
        normalization=float(grid_size),
    )
    agent = DQNAgent(**agent_cfg, rng=rng)
    agent, history = train_dqn(agent, env, n_episodes=episodes, log_interval=log_interval)

    goal = env.get_goal()
    print("\nLearned Policy (greedy action from the online network):")
    print(render_policy(lambda pos: agent.best_action(pos, goal)[0], grid_size, goal))

    results = evaluate_dqn(
        agent, env, n_episodes=test_episodes, max_steps=EVAL_CONFIG["max_steps"]
    )
    _print_test_results("DQN", results, test_episodes)
    return agent, history, results


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def qlearning_command(args: argparse.Namespace):
    _banner("Q-LEARNING (Tabular Method)")
    _, history, _ = run_qlearning(
        episodes=_or_default(args.episodes, TRAIN_CONFIG["qlearning_episodes"]),
        grid_size=args.grid_size,
        rng=np.random.default_rng(args.seed),
        log_interval=args.log_interval,
        test_episodes=args.test_episodes,
    )
    _maybe_plot(history, args.plot, "Q-Learning")


def dqn_command(args: argparse.Namespace):
    _banner("DQN (Neural Network Method)")
    _, history, _ = run_dqn(
        episodes=_or_default(args.episodes, TRAIN_CONFIG["dqn_episodes"]),
        grid_size=args.grid_size,
        rng=np.random.default_rng(args.seed),
        log_interval=args.log_interval,
        test_episodes=args.test_episodes,
        batch_size=args.batch_size,
        replay_size=args.replay_size,
        target_update_steps=args.target_update_steps,
        lr=args.lr,
    )
    _maybe_plot(history, args.plot, "DQN")


def compare_command(args: argparse.Namespace):
    _banner("COMPARISON: Q-Learning vs DQN")
    q_rng, dqn_rng = np.random.default_rng(args.seed).spawn(2)

    print("--- PHASE 1: Q-Learning ---")
    _, q_history, q_results = run_qlearning(
        episodes=_or_default(args.episodes, TRAIN_CONFIG["qlearning_episodes"]),
        grid_size=args.grid_size,
        rng=q_rng,
        log_interval=args.log_interval,
        test_episodes=args.test_episodes,
    )

    print("\n\n--- PHASE 2: DQN ---")
    _, dqn_history, dqn_results = run_dqn(
        episodes=_or_default(args.dqn_episodes, TRAIN_CONFIG["compare_dqn_episodes"]),
        grid_size=args.grid_size,
        rng=dqn_rng,
        log_interval=args.log_interval,
        test_episodes=args.test_episodes,
        batch_size=args.batch_size,
        replay_size=args.replay_size,
        target_update_steps=args.target_update_steps,
        lr=args.lr,
    )

    window = TRAIN_CONFIG["reward_window"]
    _banner("Summary")
    print(f"{'':<24}{'Q-Learning':>12}{'DQN':>12}")
    print(f"{'Episodes':<24}{len(q_history.episodes):>12d}{len(dqn_history.episodes):>12d}")
    print(
        f"{f'Final avg reward ({window})':<24}"
        f"{q_history.moving_average(window):>12.3f}{dqn_history.moving_average(window):>12.3f}"
    )
    print(
        f"{'Test success rate':<24}"
        f"{q_results['success_rate']:>12.0%}{dqn_results['success_rate']:>12.0%}"
    )
    print(f"{'Wall time (s)':<24}{q_history.elapsed:>12.1f}{dqn_history.elapsed:>12.1f}")

    if args.plot:
        stem, dot, ext = args.plot.rpartition(".")
        if not dot:
            stem, ext = args.plot, "png"
        _maybe_plot(q_history, f"{stem}_qlearning.{ext}", "Q-Learning")
        _maybe_plot(dqn_history, f"{stem}_dqn.{ext}", "DQN")


# ─────────────────────────────────────────────────────────────────────────────
# Interactive menu
# ─────────────────────────────────────────────────────────────────────────────

MENU = """
========================================
  Gridworld RL Training System
========================================

Choose what to run:

  1. Q-Learning - Tabular method
  2. DQN - Neural network method
  3. Both (compare side-by-side)
  4. Exit
"""


def interactive_menu(parser: argparse.ArgumentParser):
    """Numbered menu; each choice runs its subcommand with default arguments."""
    commands = {"1": "qlearning", "2": "dqn", "3": "compare"}
    while True:
        print(MENU)
        try:
            choice = input("Enter choice (1-4): ").strip()
        except EOFError:
            choice = "4"

        if choice == "4":
            print("\nExiting...")
            return
        if choice not in commands:
            print("\nInvalid choice. Please enter 1-4.")
            continue

        args = parser.parse_args([commands[choice]])
        args.func(args)


# ─────────────────────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

def _or_default(value: int | None, default: int) -> int:
    return default if value is None else value


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {value}")
    return value


def _add_common_args(p: argparse.ArgumentParser, episodes_default: int):
    p.add_argument(
        "--episodes",
        type=non_negative_int,
        default=None,
        help=f"Training episodes (default: {episodes_default})",
    )
    p.add_argument(
        "--grid-size",
        type=positive_int,
        default=ENV_CONFIG["size"],
        help=f"Grid size (default: {ENV_CONFIG['size']})",
    )
    p.add_argument("--seed", type=non_negative_int, default=None, help="Random seed (default: unseeded)")
    p.add_argument(
        "--log-interval",
        type=non_negative_int,
        default=TRAIN_CONFIG["log_interval"],
        help=f"Print stats every N episodes (default: {TRAIN_CONFIG['log_interval']})",
    )
    p.add_argument(
        "--test-episodes",
        type=non_negative_int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Greedy test episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    p.add_argument("--plot", type=str, default=None, help="Save training curves to PATH")


def _add_dqn_args(p: argparse.ArgumentParser):
    dqn = p.add_argument_group("DQN Hyperparameters")
    dqn.add_argument("--batch-size", type=positive_int, default=DQN_CONFIG["batch_size"], help="Replay batch size")
    dqn.add_argument("--replay-size", type=positive_int, default=DQN_CONFIG["replay_size"], help="Buffer capacity")
    dqn.add_argument(
        "--target-update-steps",
        type=positive_int,
        default=DQN_CONFIG["target_update_steps"],
        help="Steps between target updates",
    )
    dqn.add_argument("--lr", type=float, default=DQN_CONFIG["learning_rate"], help="Learning rate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridworld-rl",
        description="GridWorld - tabular Q-Learning vs DQN",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gridworld-rl                          # Interactive menu
  gridworld-rl qlearning --seed 0       # Tabular agent, reproducible
  gridworld-rl dqn --episodes 2000      # Longer DQN run
  gridworld-rl compare --plot curves.png
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    q_parser = subparsers.add_parser("qlearning", help="Train the tabular Q-learning agent")
    _add_common_args(q_parser, TRAIN_CONFIG["qlearning_episodes"])
    q_parser.set_defaults(func=qlearning_command)

    dqn_parser = subparsers.add_parser("dqn", help="Train the DQN agent")
    _add_common_args(dqn_parser, TRAIN_CONFIG["dqn_episodes"])
    _add_dqn_args(dqn_parser)
    dqn_parser.set_defaults(func=dqn_command)

    cmp_parser = subparsers.add_parser("compare", help="Train both agents and compare")
    _add_common_args(cmp_parser, TRAIN_CONFIG["qlearning_episodes"])
    cmp_parser.add_argument(
        "--dqn-episodes",
        type=non_negative_int,
        default=None,
        help=f"DQN training episodes (default: {TRAIN_CONFIG['compare_dqn_episodes']})",
    )
    _add_dqn_args(cmp_parser)
    cmp_parser.set_defaults(func=compare_command)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        interactive_menu(parser)
    else:
        args.func(args)


if __name__ == "__main__":
    main()
