import math
import random

import pygame
import pytest

from mazechase.entities.ghost import Ghost, GhostMode
from mazechase.entities.player import Player
from mazechase.map.maze import CellKind

from conftest import build_corridor_maze, build_open_maze


def make_ghost(cell, **kwargs):
    kwargs.setdefault("rng", random.Random(0))
    return Ghost(cell, 20, (255, 0, 0), **kwargs)


def make_player(cell, direction=(0, 0)):
    player = Player(cell, 20, speed=100)
    player.dir = pygame.Vector2(direction)
    return player


@pytest.mark.parametrize("aggression, expected", [(0.6, (7, 5)), (1.0, (9, 5)), (0.2, (5, 5))])
def test_chase_target_leads_the_player(aggression, expected):
    ghost = make_ghost((2, 2), aggression=aggression)
    player = make_player((5, 5), direction=(1, 0))

    assert ghost.compute_target(player) == expected


def test_scared_target_flees_away_from_player():
    ghost = make_ghost((3, 3), aggression=0.6)
    ghost.set_scared(True)
    player = make_player((5, 5))

    assert ghost.compute_target(player) == (-1, -1)


def test_returning_target_is_start_cell():
    ghost = make_ghost((6, 4))
    ghost.place_at((2, 2))
    ghost.set_mode(GhostMode.RETURNING)

    assert ghost.compute_target(make_player((5, 5), (0, 1))) == (6, 4)


def test_set_scared_reverses_and_slows():
    ghost = make_ghost((3, 3), speed=80, scared_speed=50)
    ghost.dir = pygame.Vector2(1, 0)

    ghost.set_scared(True)

    assert ghost.mode == GhostMode.SCARED
    assert ghost.get_direction() == (-1, 0)
    assert ghost.current_speed() == 50

    ghost.set_scared(False)

    assert ghost.mode == GhostMode.CHASE
    assert ghost.current_speed() == 80


def test_clearing_scared_leaves_returning_alone():
    ghost = make_ghost((3, 3))
    ghost.set_mode(GhostMode.RETURNING)

    ghost.set_scared(False)

    assert ghost.mode == GhostMode.RETURNING


def test_reset_returns_to_start_in_chase_mode():
    ghost = make_ghost((3, 3))
    ghost.place_at((6, 5))
    ghost.dir = pygame.Vector2(0, 1)
    ghost.set_scared(True)
    ghost.path = [(6, 6)]

    ghost.reset()

    assert ghost.pos == (70, 70)
    assert ghost.get_direction() == (0, 0)
    assert ghost.mode == GhostMode.CHASE
    assert ghost.path == []
    assert ghost.path_index == 0


def test_path_is_recomputed_only_after_interval():
    maze = build_open_maze(cols=12, rows=10)
    ghost = make_ghost((2, 2), speed=0, aggression=0.5)
    player = make_player((5, 3))

    assert ghost.recalc_interval == 1000

    ghost.update(999, maze, player)
    assert ghost.path == []

    ghost.update(1, maze, player)
    assert len(ghost.path) == 4
    assert ghost.path[-1] == (5, 3)
    assert ghost.since_path_calc == 0


def test_path_following_moves_then_snaps():
    maze = build_open_maze()
    ghost = make_ghost((2, 2), speed=100, aggression=0.1)
    ghost.path = [(3, 2)]
    player = make_player((6, 6))

    ghost.update(50, maze, player)
    assert ghost.pos.x == pytest.approx(55)
    assert ghost.get_direction() == (1, 0)

    ghost.update(100, maze, player)
    assert ghost.pos.x == pytest.approx(65)

    # exactly 5 px away: still a step, clamped to the waypoint
    ghost.update(100, maze, player)
    assert ghost.pos.x == pytest.approx(70)
    assert ghost.path_index == 0

    ghost.update(16, maze, player)
    assert ghost.pos == (70, 50)
    assert ghost.path_index == 1


def test_random_walk_keeps_heading_in_open_corridor():
    maze = build_corridor_maze()
    ghost = make_ghost((4, 3), aggression=0.1)
    ghost.dir = pygame.Vector2(1, 0)
    player = make_player((1, 3))

    ghost.update(16, maze, player)

    assert ghost.get_direction() == (1, 0)
    assert ghost.pos.x > 90


def test_random_walk_prefers_not_to_reverse_when_cooldown_expires():
    maze = build_corridor_maze()
    ghost = make_ghost((4, 3), aggression=0.1)
    ghost.dir = pygame.Vector2(1, 0)
    ghost.since_dir_change = 500
    player = make_player((1, 3))

    ghost.update(16, maze, player)

    assert ghost.get_direction() == (1, 0)
    assert ghost.since_dir_change == 0


def test_random_walk_reverses_at_dead_end():
    maze = build_corridor_maze()
    ghost = make_ghost((8, 3), aggression=0.1)
    ghost.dir = pygame.Vector2(1, 0)
    player = make_player((1, 3))

    ghost.update(16, maze, player)

    assert ghost.get_direction() == (-1, 0)
    assert ghost.pos.x < 170


def test_ghost_with_no_valid_direction_stays_put():
    maze = build_corridor_maze()
    maze.grid[3, 2:] = CellKind.WALL
    ghost = make_ghost((1, 3), aggression=0.1)
    player = make_player((1, 3))

    ghost.update(300, maze, player)

    assert ghost.pos == (30, 70)
    assert ghost.get_direction() == (0, 0)


def test_returning_ghost_at_start_switches_to_chase():
    maze = build_open_maze()
    ghost = make_ghost((3, 3), speed=0, aggression=0.1)
    ghost.set_mode(GhostMode.RETURNING)
    ghost.path = [(3, 4)]

    ghost.update(16, maze, make_player((6, 6)))

    assert ghost.mode == GhostMode.CHASE
    assert ghost.path == []


def test_zero_aggression_never_recomputes():
    maze = build_open_maze()
    ghost = make_ghost((3, 3), speed=0, aggression=0.0)

    assert math.isinf(ghost.recalc_interval)
    ghost.update(10_000_000, maze, make_player((6, 6)))
    assert ghost.path == []


@pytest.mark.parametrize("aggression", [-0.1, 1.5])
def test_invalid_aggression_raises(aggression):
    with pytest.raises(ValueError):
        make_ghost((3, 3), aggression=aggression)
