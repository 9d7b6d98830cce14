from __future__ import annotations

import logging
import math
import random
from enum import IntEnum
from typing import List, Optional

import numpy as np
import pygame

from mazechase.utils.directions import AXIS_DIRS
from mazechase.utils.grid import Cell, grid_center_px, manhattan, pixel_to_grid


logger = logging.getLogger(__name__)


class CellKind(IntEnum):
    EMPTY = 0
    WALL = 1
    PLAYER_START = 2
    GHOST_START = 3


MIN_COLS = 9
MIN_ROWS = 7
PLAYER_CLEAR_RADIUS = 3


class Maze:
    """Procedurally generated grid of walls, floor and start markers.

    The grid is a ``(rows, cols)`` numpy array indexed ``grid[y, x]``; every
    public method takes and returns cells as ``(x, y)``. ``generate()`` must be
    called before the queries mean anything; a new level builds a new maze.
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        cell_size: float,
        wall_density: float = 0.2,
        rng: Optional[random.Random] = None,
    ) -> None:
        if cols < MIN_COLS or rows < MIN_ROWS:
            raise ValueError(f"maze must be at least {MIN_COLS}x{MIN_ROWS}, got {cols}x{rows}")
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        if not 0.0 <= wall_density <= 1.0:
            raise ValueError("wall_density must be within [0, 1]")

        self.cols = cols
        self.rows = rows
        self.cell_size = cell_size
        self.wall_density = wall_density
        self.rng = rng or random.Random()

        self.grid = np.full((rows, cols), CellKind.EMPTY, dtype=np.int8)

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    # ---------- Generation ----------

    def generate(self) -> None:
        self.grid = np.full((self.rows, self.cols), CellKind.EMPTY, dtype=np.int8)
        self._create_boundary_walls()
        self._create_rooms()
        self._create_lane_walls()
        self._create_ghost_house()
        self.repair_connectivity()
        self._set_start_positions()
        logger.info(
            "Generated %dx%d maze (wall density %.2f, %d walls)",
            self.cols,
            self.rows,
            self.wall_density,
            int(np.count_nonzero(self.grid == CellKind.WALL)),
        )

    def _create_boundary_walls(self) -> None:
        self.grid[0, :] = CellKind.WALL
        self.grid[-1, :] = CellKind.WALL
        self.grid[:, 0] = CellKind.WALL
        self.grid[:, -1] = CellKind.WALL

    def _create_rooms(self) -> None:
        d = self.wall_density
        frequency = max(6, math.floor(12 - d * 8))
        size = max(1, math.floor(3 - d * 2))

        for y in range(3, self.rows - 3, frequency):
            for x in range(3, self.cols - 3, frequency):
                if self.rng.random() < d * 2:
                    self.grid[y:y + size, x:x + size] = CellKind.WALL

    def _create_lane_walls(self) -> None:
        d = self.wall_density
        step = max(8, math.floor(16 - d * 8))

        # horizontal lanes
        for y in range(8, self.rows - 8, step):
            for x in range(5, self.cols - 5, 3):
                if self.rng.random() < d:
                    self.grid[y, x] = CellKind.WALL

        # vertical lanes
        for x in range(8, self.cols - 8, step):
            for y in range(5, self.rows - 5, 3):
                if self.rng.random() < d:
                    self.grid[y, x] = CellKind.WALL

    def _create_ghost_house(self) -> None:
        cx, cy = self.cols // 2, self.rows // 2
        self.grid[cy - 2:cy + 3, cx - 3:cx + 4] = CellKind.WALL
        self.grid[cy - 1:cy + 2, cx - 2:cx + 3] = CellKind.EMPTY
        # doorway
        self.grid[cy - 2, cx] = CellKind.EMPTY

    def repair_connectivity(self) -> int:
        """Open every interior wall that caps exactly one open neighbour.

        Runs until no such wall is left, so calling it again is a no-op.
        Returns the number of walls removed.
        """
        removed = 0
        interior = np.zeros(self.grid.shape, dtype=bool)
        interior[1:-1, 1:-1] = True

        while True:
            is_open = np.pad(self.grid != CellKind.WALL, 1, constant_values=False)
            open_neighbors = (
                is_open[:-2, 1:-1].astype(np.int8)
                + is_open[2:, 1:-1]
                + is_open[1:-1, :-2]
                + is_open[1:-1, 2:]
            )
            caps = (self.grid == CellKind.WALL) & interior & (open_neighbors == 1)
            count = int(np.count_nonzero(caps))
            if count == 0:
                break
            self.grid[caps] = CellKind.EMPTY
            removed += count

        if removed:
            logger.debug("Connectivity repair opened %d walls", removed)
        return removed

    def _default_player_start(self) -> Cell:
        x = min(max(math.floor(self.cols * 0.1), 1), self.cols - 2)
        y = min(max(math.floor(self.rows * 0.8), 1), self.rows - 2)
        return (x, y)

    def _default_ghost_starts(self) -> List[Cell]:
        cx, cy = self.cols // 2, self.rows // 2
        return [(cx - 1, cy), (cx + 1, cy), (cx, cy - 1), (cx, cy + 1)]

    def _set_start_positions(self) -> None:
        px, py = self._default_player_start()
        self._clear_area(px, py, PLAYER_CLEAR_RADIUS)
        self.grid[py, px] = CellKind.PLAYER_START

        for gx, gy in self._default_ghost_starts():
            self.grid[gy, gx] = CellKind.GHOST_START

    def _clear_area(self, cx: int, cy: int, radius: int) -> None:
        # border ring stays intact
        y0, y1 = max(1, cy - radius), min(self.rows - 1, cy + radius + 1)
        x0, x1 = max(1, cx - radius), min(self.cols - 1, cx + radius + 1)
        area = self.grid[y0:y1, x0:x1]
        area[area == CellKind.WALL] = CellKind.EMPTY

    # ---------- Queries ----------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_walkable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self.grid[y, x] != CellKind.WALL)

    def cell_at(self, x: int, y: int) -> CellKind:
        return CellKind(int(self.grid[y, x]))

    def get_player_start_position(self) -> Cell:
        found = np.argwhere(self.grid == CellKind.PLAYER_START)
        if len(found):
            y, x = found[0]
            return (int(x), int(y))
        default = self._default_player_start()
        logger.warning("No player start marker in maze, using default %s", default)
        return default

    def get_ghost_start_positions(self) -> List[Cell]:
        found = np.argwhere(self.grid == CellKind.GHOST_START)
        if len(found):
            return [(int(x), int(y)) for y, x in found]
        defaults = self._default_ghost_starts()
        logger.warning("No ghost start markers in maze, using defaults %s", defaults)
        return defaults

    def get_walkable_neighbors(self, x: int, y: int) -> List[Cell]:
        return [(x + dx, y + dy) for dx, dy in AXIS_DIRS if self.is_walkable(x + dx, y + dy)]

    def empty_cells(self) -> List[Cell]:
        """Walkable cells that carry no start marker."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.grid == CellKind.EMPTY)]

    def is_at_boundary(self, x: int, y: int) -> bool:
        return x == 0 or x == self.cols - 1 or y == 0 or y == self.rows - 1

    @staticmethod
    def manhattan_distance(a: Cell, b: Cell) -> int:
        return manhattan(a, b)

    def pixel_to_grid(self, px: float, py: float) -> Cell:
        return pixel_to_grid(px, py, self.cell_size)

    def cell_center(self, x: int, y: int) -> pygame.Vector2:
        return grid_center_px(x, y, self.cell_size)
