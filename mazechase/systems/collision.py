from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from mazechase.entities.ghost import Ghost, GhostMode
from mazechase.entities.player import Player
from mazechase.map.pellets import PelletLayout
from mazechase.utils.grid import Cell


@dataclass
class GhostContactResult:
    eaten: List[Ghost] = field(default_factory=list)
    player_caught: bool = False


def eat_at(layout: PelletLayout, cell: Cell) -> Tuple[bool, bool]:
    """Remove whatever sits on ``cell``; regular pellets are checked first."""
    ate_pellet = cell in layout.pellets
    if ate_pellet:
        layout.pellets.remove(cell)
    ate_power = cell in layout.powers
    if ate_power:
        layout.powers.remove(cell)
    return ate_pellet, ate_power


def resolve_player_ghost_collisions(
    player: Player,
    ghosts: List[Ghost],
    power_active: bool,
    contact_distance: float,
) -> GhostContactResult:
    result = GhostContactResult()

    for g in ghosts:
        if (player.pos - g.pos).length() >= contact_distance:
            continue
        if power_active and g.mode == GhostMode.SCARED:
            g.reset()
            result.eaten.append(g)
        elif g.mode == GhostMode.RETURNING:
            # returning ghosts pass through the player
            continue
        else:
            result.player_caught = True
            break

    return result
