"""Breadth-first grid search used by the ghosts.

The search is bounded per branch: a node already ``max_depth`` steps from the
start is never expanded, so any route longer than that is abandoned while the
rest of the frontier keeps going.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Tuple

from mazechase.config import PATH_MAX_DEPTH
from mazechase.map.maze import Maze
from mazechase.utils.directions import AXIS_DIRS
from mazechase.utils.grid import Cell


def find_path(maze: Maze, start: Cell, goal: Cell, max_depth: int = PATH_MAX_DEPTH) -> List[Cell]:
    """Shortest 4-connected walkable route from ``start`` to ``goal``.

    Returns the cells to visit after ``start`` (so its length is the step
    count), or an empty list when the goal is the start, is not walkable, or
    is not reachable within ``max_depth`` steps.
    """
    if start == goal or not maze.is_walkable(*goal):
        return []

    parent: Dict[Cell, Cell] = {}
    frontier: deque[Tuple[Cell, int]] = deque([(start, 0)])
    seen = {start}

    while frontier:
        (x, y), steps = frontier.popleft()
        if steps >= max_depth:
            continue
        for dx, dy in AXIS_DIRS:
            nxt = (x + dx, y + dy)
            if nxt in seen or not maze.is_walkable(*nxt):
                continue
            seen.add(nxt)
            parent[nxt] = (x, y)
            if nxt == goal:
                path = [goal]
                while path[-1] in parent and parent[path[-1]] != start:
                    path.append(parent[path[-1]])
                return path[::-1]
            frontier.append((nxt, steps + 1))

    return []
