from __future__ import annotations

import pygame

from mazechase.entities.base import Mover
from mazechase.map.maze import Maze
from mazechase.utils.grid import Cell


class Player(Mover):
    def __init__(self, start_cell: Cell, cell_size: float, speed: float) -> None:
        super().__init__(start_cell, cell_size, speed)
        # latest requested direction, applied on the next update
        self.next_dir = pygame.Vector2(0, 0)

    def set_direction(self, dx: float, dy: float) -> None:
        self.next_dir = pygame.Vector2(dx, dy)

    def update(self, dt_ms: float, maze: Maze) -> None:
        if self.next_dir.length_squared() > 0:
            self.dir = self.next_dir
            self.next_dir = pygame.Vector2(0, 0)

        self.try_move(dt_ms, maze)
        self.wrap_horizontal(maze)

    def can_occupy(self, pos: pygame.Vector2, maze: Maze) -> bool:
        # only the centre point is tested; turns are not gated by corridor alignment
        x, y = maze.pixel_to_grid(pos.x, pos.y)
        return maze.is_walkable(x, y)

    def reset(self, cell: Cell) -> None:
        self.start_cell = cell
        self.place_at(cell)
        self.dir = pygame.Vector2(0, 0)
        self.next_dir = pygame.Vector2(0, 0)
