from __future__ import annotations

import pygame

from mazechase.game import GameSession, GameState
from mazechase.utils.directions import DOWN, LEFT, RIGHT, UP


KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}

KEY_DIFFICULTIES = {
    pygame.K_1: "heaven",
    pygame.K_2: "human",
    pygame.K_3: "hell",
}

START_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


def handle_event(session: GameSession, event: pygame.event.Event) -> None:
    """Translate one key press into session triggers."""
    if event.type != pygame.KEYDOWN:
        return
    key = event.key
    state = session.state

    if key in KEY_DIFFICULTIES and state in (
        GameState.SELECTING_DIFFICULTY,
        GameState.MENU,
        GameState.GAME_OVER,
    ):
        session.set_difficulty(KEY_DIFFICULTIES[key])
        return

    if key == pygame.K_p:
        session.toggle_pause()
        return

    if key in START_KEYS:
        if state in (GameState.MENU, GameState.GAME_OVER):
            session.start_game()
        elif state == GameState.WIN:
            session.next_level()
        return

    if key in KEY_DIRECTIONS:
        if state in (GameState.MENU, GameState.GAME_OVER):
            # a direction press doubles as "start"
            session.start_game()
            return
        dx, dy = KEY_DIRECTIONS[key]
        session.set_player_direction(dx, dy)
