import random

import numpy as np
import pytest

from mazechase.game import GameSession
from mazechase.map.maze import CellKind, Maze


def build_open_maze(cols=10, rows=8, cell_size=20):
    """Border ring of walls around a fully open interior."""
    maze = Maze(cols, rows, cell_size, wall_density=0.0)
    maze.grid = np.full((rows, cols), CellKind.EMPTY, dtype=np.int8)
    maze.grid[0, :] = CellKind.WALL
    maze.grid[-1, :] = CellKind.WALL
    maze.grid[:, 0] = CellKind.WALL
    maze.grid[:, -1] = CellKind.WALL
    return maze


def build_corridor_maze(cols=10, rows=7, row=3, cell_size=20):
    """Solid walls except one horizontal corridor along ``row``."""
    maze = Maze(cols, rows, cell_size, wall_density=0.0)
    maze.grid = np.full((rows, cols), CellKind.WALL, dtype=np.int8)
    maze.grid[row, 1:-1] = CellKind.EMPTY
    return maze


def freeze_ghosts(session):
    for g in session.ghosts:
        g.speed = 0.0
        g.scared_speed = 0.0


@pytest.fixture
def open_maze():
    return build_open_maze()


@pytest.fixture
def session():
    s = GameSession(rng=random.Random(1234))
    s.set_difficulty("human")
    s.start_game()
    freeze_ghosts(s)
    return s
