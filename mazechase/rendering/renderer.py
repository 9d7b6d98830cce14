from __future__ import annotations

import math
from typing import List

import pygame

from mazechase.config import (
    COLOR_BG,
    COLOR_GHOST_EYES,
    COLOR_GHOST_RETURNING,
    COLOR_GHOST_SCARED,
    COLOR_HUD,
    COLOR_PELLET,
    COLOR_PLAYER,
    COLOR_POWER,
    COLOR_TEXT,
    COLOR_WALL,
    COLOR_WALL_EDGE,
    HUD_HEIGHT,
    PELLET_RADIUS,
    PLAYER_ARC_STEPS,
    PLAYER_MOUTH_DEG,
    POWER_RADIUS,
)
from mazechase.entities.ghost import Ghost, GhostMode
from mazechase.entities.player import Player
from mazechase.game import GameSession, GameState
from mazechase.map.maze import Maze


MODE_COLORS = {
    GhostMode.SCARED: COLOR_GHOST_SCARED,
    GhostMode.RETURNING: COLOR_GHOST_RETURNING,
}

OVERLAY_TEXT = {
    GameState.SELECTING_DIFFICULTY: "1: HEAVEN   2: HUMAN   3: HELL",
    GameState.MENU: "PRESS ENTER TO START",
    GameState.PAUSED: "PAUSED (P to resume)",
    GameState.WIN: "LEVEL CLEAR (ENTER for next level)",
}


class Renderer:
    """Draws a session; never mutates it."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._wall_maze = None
        self.wall_rects: List[pygame.Rect] = []

    def _walls_for(self, maze: Maze) -> List[pygame.Rect]:
        # rebuilt only when the session swaps in a new maze
        if maze is not self._wall_maze:
            cs = maze.cell_size
            self.wall_rects = [
                pygame.Rect(int(x * cs), int(y * cs), int(cs), int(cs))
                for y in range(maze.rows)
                for x in range(maze.cols)
                if not maze.is_walkable(x, y)
            ]
            self._wall_maze = maze
        return self.wall_rects

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        screen.fill(COLOR_BG)
        s = self.session
        if s.maze is not None:
            self.draw_world(screen, s.maze)
            self.draw_player(screen, s.player)
            self.draw_ghosts(screen, s.ghosts)
        self.draw_hud(screen, font)

    def draw_world(self, screen: pygame.Surface, maze: Maze) -> None:
        for rect in self._walls_for(maze):
            pygame.draw.rect(screen, COLOR_WALL, rect)
            pygame.draw.rect(screen, COLOR_WALL_EDGE, rect, 1)

        cs = maze.cell_size
        for (x, y) in self.session.pellets.pellets:
            center = (int(x * cs + cs / 2), int(y * cs + cs / 2))
            pygame.draw.circle(screen, COLOR_PELLET, center, PELLET_RADIUS)

        for (x, y) in self.session.pellets.powers:
            center = (int(x * cs + cs / 2), int(y * cs + cs / 2))
            pygame.draw.circle(screen, COLOR_POWER, center, POWER_RADIUS)

    def draw_player(self, screen: pygame.Surface, player: Player) -> None:
        # disc with a mouth wedge cut out along the heading
        facing = player.get_direction()
        heading = math.atan2(facing.y, facing.x) if facing.length_squared() else 0.0
        half_mouth = math.radians(PLAYER_MOUTH_DEG) / 2
        r = player.radius
        cx, cy = player.pos

        outline = [(int(cx), int(cy))]
        for i in range(PLAYER_ARC_STEPS + 1):
            a = heading + half_mouth + (2 * math.pi - 2 * half_mouth) * i / PLAYER_ARC_STEPS
            outline.append((int(cx + r * math.cos(a)), int(cy + r * math.sin(a))))
        pygame.draw.polygon(screen, COLOR_PLAYER, outline)

    def draw_ghosts(self, screen: pygame.Surface, ghosts: List[Ghost]) -> None:
        for g in ghosts:
            body = MODE_COLORS.get(g.mode, g.color)
            r = int(g.radius)
            x, y = int(g.pos.x), int(g.pos.y)
            # round head over a flat skirt
            pygame.draw.circle(screen, body, (x, y), r)
            pygame.draw.rect(screen, body, pygame.Rect(x - r, y, 2 * r, r))

            eye_dx = max(1, int(r * 0.4))
            eye_y = y - max(1, int(r * 0.3))
            for ex in (x - eye_dx, x + eye_dx):
                pygame.draw.circle(screen, COLOR_GHOST_EYES, (ex, eye_y), max(1, r // 4))

    def draw_hud(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        s = self.session
        hud_y = int(s.height)
        width = int(s.width)
        pygame.draw.rect(screen, COLOR_HUD, pygame.Rect(0, hud_y, width, HUD_HEIGHT))

        text = f"Score: {s.score}   Lives: {s.lives}   Level: {s.level}   Best: {s.high_score}"
        if s.power_mode:
            text += f"   POWER {s.power.remaining / 1000.0:.1f}s"
        screen.blit(font.render(text, True, COLOR_TEXT), (8, hud_y + 6))

        if s.state == GameState.GAME_OVER:
            tip = f"GAME OVER - {s.game_over_message()} (ENTER to restart)"
        else:
            tip = OVERLAY_TEXT.get(s.state)
        if tip:
            surf = font.render(tip, True, COLOR_TEXT)
            screen.blit(surf, surf.get_rect(center=(width // 2, hud_y // 2)))
