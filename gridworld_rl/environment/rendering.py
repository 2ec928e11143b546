"""Text rendering helpers for GridWorld.

This file is the ONLY place that formats grids. Agents and the environment
expose read accessors; the functions here turn them into strings.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from .constants import ACTION_ARROWS, Action
from .gridworld import Position


def render_text(size: int, agent_pos: Position, goal_pos: Position) -> str:
    lines = []
    for y in range(size):
        row = ""
        for x in range(size):
            if (x, y) == agent_pos:
                row += " A"
            elif (x, y) == goal_pos:
                row += " G"
            else:
                row += " ."
        lines.append(row)
    return "\n".join(lines)


def render_policy(
    best_action: Callable[[Position], Action],
    size: int,
    goal: Position,
) -> str:
    """Arrow per cell for the greedy action; the goal cell shows 'G'.

    Args:
        best_action: maps a position to the action the agent would exploit.
        size: grid size.
        goal: goal position.
    """
    lines = []
    for y in range(size):
        cells = []
        for x in range(size):
            pos = Position(x, y)
            if pos == goal:
                cells.append("G")
            else:
                cells.append(ACTION_ARROWS[Action(best_action(pos))])
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_values(value: Callable[[Position], float], size: int) -> str:
    """Grid of max Q-values, two decimals, width 6."""
    lines = []
    for y in range(size):
        lines.append(" ".join(f"{value(Position(x, y)):6.2f}" for x in range(size)))
    return "\n".join(lines)


def render_path(path: Sequence[Position] | Iterable[Position]) -> str:
    return " -> ".join(f"({p.x},{p.y})" for p in path)
