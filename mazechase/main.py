import logging

import pygame

from mazechase.config import DEFAULT_STORAGE_FILE, FPS, HUD_HEIGHT, WINDOW_TITLE
from mazechase.controls import handle_event
from mazechase.game import GameSession, GameState
from mazechase.rendering.renderer import Renderer
from mazechase.storage import JsonStorage


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)

    session = GameSession(storage=JsonStorage(DEFAULT_STORAGE_FILE))
    renderer = Renderer(session)
    screen = pygame.display.set_mode((int(session.width), int(session.height) + HUD_HEIGHT))
    font = pygame.font.SysFont("consolas", 18)
    clock = pygame.time.Clock()

    running = True
    while running:
        dt_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
                continue
            handle_event(session, event)

        # losing focus pauses the game
        if session.state == GameState.PLAYING and not pygame.key.get_focused():
            session.toggle_pause()

        session.update(dt_ms)
        renderer.draw(screen, font)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
