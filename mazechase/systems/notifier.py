from __future__ import annotations

import logging

from mazechase.utils.grid import Cell


logger = logging.getLogger(__name__)


class GameNotifier:
    """Side-effect hooks the session calls on gameplay events.

    Hosts subclass this to play sounds, vibrate, update overlays and so on.
    The base class only logs, so the core runs the same with or without a
    host attached.
    """

    def pellet_eaten(self, cell: Cell) -> None:
        pass

    def power_pellet_eaten(self, cell: Cell) -> None:
        logger.debug("Power pellet eaten at %s", cell)

    def ghost_eaten(self, index: int, score: int) -> None:
        logger.debug("Ghost %d eaten, score %d", index, score)

    def player_caught(self, lives_left: int) -> None:
        logger.debug("Player caught, %d lives left", lives_left)

    def game_over(self, score: int) -> None:
        logger.info("Game over with score %d", score)

    def level_complete(self, level: int, score: int) -> None:
        logger.info("Level %d complete with score %d", level, score)
