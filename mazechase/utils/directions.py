from __future__ import annotations

from typing import List, Tuple

import pygame


Vec = Tuple[int, int]

UP: Vec = (0, -1)
RIGHT: Vec = (1, 0)
DOWN: Vec = (0, 1)
LEFT: Vec = (-1, 0)

# Scan order used by the pathfinder and the random walk
AXIS_DIRS: List[Vec] = [UP, RIGHT, DOWN, LEFT]


def to_vec(d: Vec) -> pygame.Vector2:
    return pygame.Vector2(d[0], d[1])


def is_reverse(d: Vec, current: pygame.Vector2) -> bool:
    """True when ``d`` points exactly against ``current``."""
    return d[0] == -current.x and d[1] == -current.y
