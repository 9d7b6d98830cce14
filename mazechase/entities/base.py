from __future__ import annotations

from typing import Optional

import pygame

from mazechase.config import ENTITY_RADIUS_FACTOR
from mazechase.map.maze import Maze
from mazechase.utils.grid import Cell, grid_center_px, pixel_to_grid


class Mover:
    """Continuous-position entity moving over a maze grid.

    Position is in pixels; the grid cell is always derived from it. Speeds are
    px/sec and every update receives elapsed milliseconds.
    """

    def __init__(self, start_cell: Cell, cell_size: float, speed: float, radius: Optional[float] = None) -> None:
        self.start_cell = start_cell
        self.cell_size = float(cell_size)
        self.pos = grid_center_px(start_cell[0], start_cell[1], self.cell_size)
        self.speed = float(speed)
        self.radius = float(radius if radius is not None else self.cell_size * ENTITY_RADIUS_FACTOR)

        self.dir = pygame.Vector2(0, 0)

    def current_speed(self) -> float:
        return self.speed

    def move_step(self, dt_ms: float) -> pygame.Vector2:
        return self.pos + self.dir * (self.current_speed() * dt_ms / 1000.0)

    def can_occupy(self, pos: pygame.Vector2, maze: Maze) -> bool:
        raise NotImplementedError

    def try_move(self, dt_ms: float, maze: Maze) -> bool:
        """Commit this frame's displacement unless the destination is blocked."""
        next_pos = self.move_step(dt_ms)
        if self.can_occupy(next_pos, maze):
            self.pos = next_pos
            return True
        return False

    def wrap_horizontal(self, maze: Maze) -> None:
        # one full period is the maze width plus a radius of overhang per side
        period = maze.width + 2 * self.radius
        if self.pos.x < -self.radius:
            self.pos.x += period
        elif self.pos.x > maze.width + self.radius:
            self.pos.x -= period

    def place_at(self, cell: Cell) -> None:
        self.pos = grid_center_px(cell[0], cell[1], self.cell_size)

    def get_grid_position(self) -> Cell:
        return pixel_to_grid(self.pos.x, self.pos.y, self.cell_size)

    def get_direction(self) -> pygame.Vector2:
        return pygame.Vector2(self.dir)

    def is_moving(self) -> bool:
        return self.dir.length_squared() > 0
