from __future__ import annotations

import math
import random
from enum import Enum
from typing import List, Optional, Tuple

import pygame

from mazechase.config import (
    CHASE_LOOKAHEAD,
    CORNER_MARGIN_PX,
    DIRECTION_CHANGE_MS,
    PATH_RECALC_BASE_MS,
    SCARED_ESCAPE,
    WAYPOINT_SNAP_PX,
)
from mazechase.entities.base import Mover
from mazechase.map.maze import Maze
from mazechase.systems.pathfinding import find_path
from mazechase.utils.directions import AXIS_DIRS, is_reverse, to_vec
from mazechase.utils.grid import Cell


class GhostMode(Enum):
    CHASE = "chase"
    SCARED = "scared"
    RETURNING = "returning"


class Ghost(Mover):
    """Path-following chaser with a random-walk fallback.

    ``aggression`` in [0, 1] scales three things at once: how far ahead of
    the player the chase target sits, how often the path is recomputed
    (every ``500 / aggression`` ms) and, inversely, how far a scared ghost
    tries to flee.
    """

    def __init__(
        self,
        start_cell: Cell,
        cell_size: float,
        color: Tuple[int, int, int],
        speed: float = 80.0,
        scared_speed: float = 50.0,
        aggression: float = 0.6,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 <= aggression <= 1.0:
            raise ValueError("aggression must be within [0, 1]")
        super().__init__(start_cell, cell_size, speed)
        self.color = color
        self.scared_speed = float(scared_speed)
        self.aggression = aggression
        self.rng = rng or random.Random()

        self.mode = GhostMode.CHASE
        self.target: Cell = start_cell
        self.path: List[Cell] = []
        self.path_index = 0

        self.recalc_interval = PATH_RECALC_BASE_MS / aggression if aggression > 0 else math.inf
        self.since_path_calc = 0.0
        self.since_dir_change = 0.0

    @property
    def scared(self) -> bool:
        return self.mode == GhostMode.SCARED

    def current_speed(self) -> float:
        return self.scared_speed if self.scared else self.speed

    # ---------- Mode control (driven by the session) ----------

    def set_scared(self, scared: bool) -> None:
        if scared:
            self.mode = GhostMode.SCARED
            # fright reaction; the next move's collision check fixes illegal headings
            self.dir = -self.dir
        elif self.mode == GhostMode.SCARED:
            self.mode = GhostMode.CHASE

    def set_mode(self, mode: GhostMode) -> None:
        if mode == GhostMode.SCARED:
            self.set_scared(True)
            return
        self.mode = mode

    def reset(self) -> None:
        self.place_at(self.start_cell)
        self.dir = pygame.Vector2(0, 0)
        self.mode = GhostMode.CHASE
        self.path = []
        self.path_index = 0

    # ---------- Per-frame update ----------

    def update(self, dt_ms: float, maze: Maze, player: Mover) -> None:
        self.since_dir_change += dt_ms
        self.since_path_calc += dt_ms

        if self.mode == GhostMode.RETURNING and self.get_grid_position() == self.start_cell:
            self.mode = GhostMode.CHASE
            self.path = []
            self.path_index = 0

        self.target = self.compute_target(player)

        if self.since_path_calc >= self.recalc_interval:
            self.path = find_path(maze, self.get_grid_position(), self.target)
            self.path_index = 0
            self.since_path_calc = 0.0

        self._move(dt_ms, maze)
        self.wrap_horizontal(maze)

    def compute_target(self, player: Mover) -> Cell:
        px, py = player.get_grid_position()

        if self.mode == GhostMode.CHASE:
            ahead = math.floor(CHASE_LOOKAHEAD * self.aggression)
            d = player.get_direction()
            return (px + int(round(d.x * ahead)), py + int(round(d.y * ahead)))

        if self.mode == GhostMode.SCARED:
            # lower aggression flees further
            escape = math.floor(SCARED_ESCAPE * (1 - self.aggression))
            gx, gy = self.get_grid_position()
            return (gx + (gx - px) * escape, gy + (gy - py) * escape)

        return self.start_cell

    # ---------- Movement ----------

    def _move(self, dt_ms: float, maze: Maze) -> None:
        if self.path_index < len(self.path):
            self._follow_path(dt_ms, maze)
        else:
            self._random_walk(dt_ms, maze)

    def _follow_path(self, dt_ms: float, maze: Maze) -> None:
        wx, wy = self.path[self.path_index]
        center = maze.cell_center(wx, wy)
        offset = center - self.pos
        distance = offset.length()

        if distance < WAYPOINT_SNAP_PX:
            self.pos = center
            self.path_index += 1
            return

        self.dir = offset / distance
        step = self.current_speed() * dt_ms / 1000.0
        self.pos = self.pos + self.dir * min(step, distance)

    def _random_walk(self, dt_ms: float, maze: Maze) -> None:
        if self.since_dir_change >= DIRECTION_CHANGE_MS or not self._can_move_in_direction(self.dir, maze):
            self._choose_new_direction(maze)
            self.since_dir_change = 0.0

        if not self.try_move(dt_ms, maze):
            self._choose_new_direction(maze)

    def _choose_new_direction(self, maze: Maze) -> None:
        valid = [d for d in AXIS_DIRS if self._can_move_in_direction(to_vec(d), maze)]
        if not valid:
            return

        forward = [d for d in valid if not is_reverse(d, self.dir)]
        self.dir = to_vec(self.rng.choice(forward or valid))

    def _can_move_in_direction(self, d: pygame.Vector2, maze: Maze) -> bool:
        ahead = self.pos + d * (self.cell_size / 2.0)
        return self.can_occupy(ahead, maze)

    def can_occupy(self, pos: pygame.Vector2, maze: Maze) -> bool:
        # all four corners of the (shrunk) bounding box must be on open cells
        margin = self.radius - CORNER_MARGIN_PX
        for cx, cy in (
            (pos.x - margin, pos.y - margin),
            (pos.x + margin, pos.y - margin),
            (pos.x - margin, pos.y + margin),
            (pos.x + margin, pos.y + margin),
        ):
            x, y = maze.pixel_to_grid(cx, cy)
            if not maze.is_walkable(x, y):
                return False
        return True
