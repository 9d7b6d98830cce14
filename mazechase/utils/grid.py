from __future__ import annotations

import math
from typing import Tuple

import pygame


Cell = Tuple[int, int]


def pixel_to_grid(px: float, py: float, cell_size: float) -> Cell:
    return (math.floor(px / cell_size), math.floor(py / cell_size))


def grid_center_px(x: int, y: int, cell_size: float) -> pygame.Vector2:
    return pygame.Vector2(x * cell_size + cell_size / 2.0, y * cell_size + cell_size / 2.0)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
