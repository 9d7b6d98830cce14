import random

import numpy as np
import pytest

from mazechase.map.maze import CellKind, Maze


def generated(seed, density=0.2, cols=40, rows=30):
    maze = Maze(cols, rows, 20, wall_density=density, rng=random.Random(seed))
    maze.generate()
    return maze


def walls_capping_one_open_cell(maze):
    caps = []
    for y in range(1, maze.rows - 1):
        for x in range(1, maze.cols - 1):
            if maze.grid[y, x] != CellKind.WALL:
                continue
            open_count = sum(
                1 for nx, ny in ((x, y - 1), (x + 1, y), (x, y + 1), (x - 1, y))
                if maze.grid[ny, nx] != CellKind.WALL
            )
            if open_count == 1:
                caps.append((x, y))
    return caps


@pytest.mark.parametrize("density", [0.0, 0.1, 0.2, 0.35, 1.0])
@pytest.mark.parametrize("seed", range(4))
def test_generated_maze_keeps_border_and_shape(seed, density):
    maze = generated(seed, density)

    assert maze.grid.shape == (30, 40)
    assert (maze.grid[0, :] == CellKind.WALL).all()
    assert (maze.grid[-1, :] == CellKind.WALL).all()
    assert (maze.grid[:, 0] == CellKind.WALL).all()
    assert (maze.grid[:, -1] == CellKind.WALL).all()


@pytest.mark.parametrize("seed", range(4))
def test_is_walkable_matches_grid(seed):
    maze = generated(seed, 0.35)

    for y in range(maze.rows):
        for x in range(maze.cols):
            assert maze.is_walkable(x, y) == (maze.grid[y, x] != CellKind.WALL)

    for x, y in [(-1, 0), (0, -1), (maze.cols, 0), (0, maze.rows), (-5, -5), (maze.cols + 3, 4)]:
        assert maze.is_walkable(x, y) is False


@pytest.mark.parametrize("seed", range(4))
def test_start_cells_are_walkable(seed):
    maze = generated(seed, 0.35)

    px, py = maze.get_player_start_position()
    assert maze.is_walkable(px, py)
    assert maze.cell_at(px, py) == CellKind.PLAYER_START

    ghost_starts = maze.get_ghost_start_positions()
    assert len(ghost_starts) == 4
    for gx, gy in ghost_starts:
        assert maze.is_walkable(gx, gy)
        assert maze.cell_at(gx, gy) == CellKind.GHOST_START


def test_player_start_surroundings_are_cleared():
    maze = generated(7, 1.0)
    px, py = maze.get_player_start_position()
    assert (px, py) == (4, 24)

    for y in range(py - 3, py + 4):
        for x in range(px - 3, px + 4):
            assert maze.is_walkable(x, y)


def test_ghost_house_has_single_doorway():
    maze = generated(3, 0.0)
    cx, cy = maze.cols // 2, maze.rows // 2

    top = [maze.is_walkable(x, cy - 2) for x in range(cx - 3, cx + 4)]
    assert top == [False, False, False, True, False, False, False]
    assert all(not maze.is_walkable(x, cy + 2) for x in range(cx - 3, cx + 4))
    assert all(not maze.is_walkable(cx - 3, y) for y in range(cy - 2, cy + 3))
    assert all(not maze.is_walkable(cx + 3, y) for y in range(cy - 2, cy + 3))


def test_repair_removes_single_cell_caps_and_is_idempotent():
    rng = random.Random(99)
    maze = Maze(20, 15, 10)
    maze.grid = np.array(
        [[CellKind.WALL if rng.random() < 0.45 else CellKind.EMPTY for _ in range(20)] for _ in range(15)],
        dtype=np.int8,
    )
    maze.grid[0, :] = CellKind.WALL
    maze.grid[-1, :] = CellKind.WALL
    maze.grid[:, 0] = CellKind.WALL
    maze.grid[:, -1] = CellKind.WALL

    assert walls_capping_one_open_cell(maze)
    maze.repair_connectivity()
    once = maze.grid.copy()

    assert walls_capping_one_open_cell(maze) == []
    assert maze.repair_connectivity() == 0
    assert np.array_equal(maze.grid, once)
    assert (maze.grid[0, :] == CellKind.WALL).all()


def test_repair_opens_a_dead_end_cap():
    maze = Maze(9, 7, 10)
    maze.grid = np.full((7, 9), CellKind.WALL, dtype=np.int8)
    maze.grid[3, 1:4] = CellKind.EMPTY

    removed = maze.repair_connectivity()

    assert removed > 0
    assert maze.is_walkable(4, 3)


def test_missing_markers_fall_back_to_defaults():
    maze = generated(0)
    maze.grid[maze.grid == CellKind.PLAYER_START] = CellKind.EMPTY
    maze.grid[maze.grid == CellKind.GHOST_START] = CellKind.EMPTY

    assert maze.get_player_start_position() == (4, 24)
    assert maze.get_ghost_start_positions() == [(19, 15), (21, 15), (20, 14), (20, 16)]


def test_regenerate_replaces_grid_with_same_seed_result():
    a = generated(5, 0.3)
    b = generated(5, 0.3)
    assert np.array_equal(a.grid, b.grid)


def test_neighbor_and_distance_helpers(open_maze):
    assert sorted(open_maze.get_walkable_neighbors(1, 1)) == [(1, 2), (2, 1)]
    assert open_maze.is_at_boundary(0, 3)
    assert not open_maze.is_at_boundary(2, 3)
    assert Maze.manhattan_distance((1, 1), (4, 5)) == 7
    assert open_maze.pixel_to_grid(39.9, 40.0) == (1, 2)
    assert open_maze.cell_center(1, 2) == (30, 50)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(cols=8, rows=30, cell_size=20),
        dict(cols=40, rows=6, cell_size=20),
        dict(cols=40, rows=30, cell_size=0),
        dict(cols=40, rows=30, cell_size=20, wall_density=1.5),
    ],
)
def test_invalid_construction_raises(kwargs):
    with pytest.raises(ValueError):
        Maze(**kwargs)
