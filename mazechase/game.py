from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, Optional

from mazechase.config import (
    CELL_SIZE,
    COLS,
    CONTACT_FACTOR,
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    EAT_GHOST_SCORE,
    GAME_OVER_MESSAGES,
    GHOST_COLORS,
    HIGH_SCORE_KEY,
    PELLET_SCORE,
    POWER_SCORE,
    ROWS,
    Difficulty,
)
from mazechase.entities.ghost import Ghost
from mazechase.entities.player import Player
from mazechase.map.maze import Maze
from mazechase.map.pellets import PelletLayout, place_pellets
from mazechase.storage import JsonStorage
from mazechase.systems.collision import eat_at, resolve_player_ghost_collisions
from mazechase.systems.notifier import GameNotifier
from mazechase.systems.power_mode import PowerMode


logger = logging.getLogger(__name__)


class GameState(Enum):
    SELECTING_DIFFICULTY = "selecting_difficulty"
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WIN = "win"


class GameSession:
    """One player's run: difficulty, level setup and the per-frame loop.

    The session never reads a clock. The host calls ``update(dt_ms)`` once per
    frame while the state is PLAYING and renders the public fields afterwards.
    """

    def __init__(
        self,
        cols: int = COLS,
        rows: int = ROWS,
        cell_size: float = CELL_SIZE,
        notifier: Optional[GameNotifier] = None,
        storage: Optional[JsonStorage] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.cols = cols
        self.rows = rows
        self.cell_size = cell_size
        self.notifier = notifier or GameNotifier()
        self.storage = storage
        self.rng = rng or random.Random()

        self.state = GameState.SELECTING_DIFFICULTY
        self.difficulty_name: Optional[str] = None
        self.difficulty: Optional[Difficulty] = None

        self.score = 0
        self.lives = 0
        self.level = 1
        self.high_score = self._load_high_score()

        self.maze: Optional[Maze] = None
        self.player: Optional[Player] = None
        self.ghosts: List[Ghost] = []
        self.pellets = PelletLayout(pellets=set(), powers=set())
        self.power = PowerMode(0)

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    @property
    def power_mode(self) -> bool:
        return self.power.active

    # ---------- Host triggers ----------

    def set_difficulty(self, name: str) -> None:
        if self.state in (GameState.PLAYING, GameState.PAUSED):
            logger.warning("Ignoring difficulty change to %r during a running game", name)
            return
        self.difficulty = DIFFICULTIES[name]
        self.difficulty_name = name
        self.state = GameState.MENU
        logger.info("Difficulty set to %s", name)

    def start_game(self) -> None:
        if self.difficulty is None:
            self.set_difficulty(DEFAULT_DIFFICULTY)

        self.score = 0
        self.lives = self.difficulty.lives
        self.level = 1
        self.setup_level()
        self.state = GameState.PLAYING

    def next_level(self) -> None:
        if self.state != GameState.WIN:
            logger.warning("next_level() called in state %s", self.state.value)
            return
        self.setup_level()
        self.state = GameState.PLAYING

    def toggle_pause(self) -> None:
        if self.state == GameState.PLAYING:
            self.state = GameState.PAUSED
        elif self.state == GameState.PAUSED:
            self.state = GameState.PLAYING

    def set_player_direction(self, dx: int, dy: int) -> None:
        if self.state == GameState.PLAYING and self.player is not None:
            self.player.set_direction(dx, dy)

    def game_over_message(self) -> str:
        tier = min(self.score // 1000, len(GAME_OVER_MESSAGES) - 1)
        return GAME_OVER_MESSAGES[tier]

    # ---------- Level setup ----------

    def setup_level(self) -> None:
        d = self.difficulty
        self.maze = Maze(self.cols, self.rows, self.cell_size, d.wall_density, rng=self.rng)
        self.maze.generate()

        self.player = Player(self.maze.get_player_start_position(), self.cell_size, d.player_speed)
        self.ghosts = [
            Ghost(
                cell,
                self.cell_size,
                GHOST_COLORS[i % len(GHOST_COLORS)],
                speed=d.ghost_speed,
                scared_speed=d.scared_speed,
                aggression=d.ghost_aggression,
                rng=self.rng,
            )
            for i, cell in enumerate(self.maze.get_ghost_start_positions())
        ]
        self.pellets = place_pellets(self.maze, self.rng)
        self.power = PowerMode(d.power_duration)

        logger.info(
            "Level %d ready: %d pellets, %d power pellets, %d ghosts",
            self.level,
            len(self.pellets.pellets),
            len(self.pellets.powers),
            len(self.ghosts),
        )

    # ---------- Per-frame loop ----------

    def update(self, dt_ms: float) -> None:
        if self.state != GameState.PLAYING:
            return

        if self.power.update(dt_ms):
            self._end_power_mode()

        self.player.update(dt_ms, self.maze)

        for g in self.ghosts:
            g.update(dt_ms, self.maze, self.player)

        self._resolve_collisions()
        self._check_end_conditions()

    def _resolve_collisions(self) -> None:
        cell = self.player.get_grid_position()
        ate_pellet, ate_power = eat_at(self.pellets, cell)
        if ate_pellet:
            self.score += PELLET_SCORE
            self.notifier.pellet_eaten(cell)
        if ate_power:
            self.score += POWER_SCORE
            self._start_power_mode()
            self.notifier.power_pellet_eaten(cell)

        result = resolve_player_ghost_collisions(
            self.player,
            self.ghosts,
            self.power.active,
            CONTACT_FACTOR * self.cell_size,
        )
        for g in result.eaten:
            self.score += EAT_GHOST_SCORE
            self.notifier.ghost_eaten(self.ghosts.index(g), self.score)

        if result.player_caught:
            self.lives -= 1
            self.notifier.player_caught(self.lives)
            if self.lives > 0:
                self._reset_positions()

    def _check_end_conditions(self) -> None:
        if self.lives <= 0:
            self.state = GameState.GAME_OVER
            self._record_high_score()
            self.notifier.game_over(self.score)
        elif self.pellets.remaining() == 0:
            self.state = GameState.WIN
            self.level += 1
            self._record_high_score()
            self.notifier.level_complete(self.level - 1, self.score)

    def _start_power_mode(self) -> None:
        self.power.activate()
        for g in self.ghosts:
            g.set_scared(True)

    def _end_power_mode(self) -> None:
        for g in self.ghosts:
            if g.scared:
                g.set_scared(False)

    def _reset_positions(self) -> None:
        self.player.reset(self.maze.get_player_start_position())
        for g in self.ghosts:
            g.reset()
        self.power.clear()

    def _load_high_score(self) -> int:
        if self.storage is None:
            return 0
        stored = self.storage.load(HIGH_SCORE_KEY, 0)
        try:
            return int(stored)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable high score %r", stored)
            return 0

    def _record_high_score(self) -> None:
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        if self.storage is not None:
            self.storage.save(HIGH_SCORE_KEY, self.score)
