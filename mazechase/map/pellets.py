from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Set

from mazechase.config import PELLET_CHANCE, POWER_PELLET_CHANCE
from mazechase.map.maze import Maze
from mazechase.utils.grid import Cell


@dataclass
class PelletLayout:
    pellets: Set[Cell]
    powers: Set[Cell]

    def remaining(self) -> int:
        return len(self.pellets) + len(self.powers)


def place_pellets(
    maze: Maze,
    rng: random.Random,
    pellet_chance: float = PELLET_CHANCE,
    power_chance: float = POWER_PELLET_CHANCE,
) -> PelletLayout:
    """Roll once per empty cell: power pellet, regular pellet, or nothing.

    Start-marker cells and walls never receive a pellet, and a cell lands in
    at most one of the two sets.
    """
    pellets: Set[Cell] = set()
    powers: Set[Cell] = set()

    for cell in maze.empty_cells():
        roll = rng.random()
        if roll < power_chance:
            powers.add(cell)
        elif roll < power_chance + pellet_chance:
            pellets.add(cell)

    return PelletLayout(pellets=pellets, powers=powers)
