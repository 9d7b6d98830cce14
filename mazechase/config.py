from __future__ import annotations

from dataclasses import dataclass

# Window / timing
FPS = 60
WINDOW_TITLE = "Maze Chase"
HUD_HEIGHT = 32

# Grid (800x600 playfield)
CELL_SIZE = 20
COLS = 40
ROWS = 30

# Scoring
PELLET_SCORE = 10
POWER_SCORE = 50
EAT_GHOST_SCORE = 200

# Pellet placement: every walkable non-start cell rolls once
PELLET_CHANCE = 0.8
POWER_PELLET_CHANCE = 0.02

# Collision
CONTACT_FACTOR = 0.8  # player-ghost contact distance, in cells
ENTITY_RADIUS_FACTOR = 0.4

# Ghost AI
PATH_MAX_DEPTH = 20
PATH_RECALC_BASE_MS = 500.0
WAYPOINT_SNAP_PX = 5.0
DIRECTION_CHANGE_MS = 200.0
CORNER_MARGIN_PX = 2.0
CHASE_LOOKAHEAD = 4
SCARED_ESCAPE = 6

# Storage
HIGH_SCORE_KEY = "high_score"
DEFAULT_STORAGE_FILE = "mazechase_save.json"

GAME_OVER_MESSAGES = [
    "Keep trying!",
    "Nice attempt!",
    "You did great!",
    "Simply amazing!",
    "You are a maze master!",
]


@dataclass(frozen=True)
class Difficulty:
    ghost_speed: float  # px/sec
    scared_speed: float
    player_speed: float
    wall_density: float
    power_duration: float  # ms
    lives: int
    ghost_aggression: float


DIFFICULTIES = {
    "heaven": Difficulty(
        ghost_speed=60.0,
        scared_speed=40.0,
        player_speed=120.0,
        wall_density=0.1,
        power_duration=10000.0,
        lives=5,
        ghost_aggression=0.3,
    ),
    "human": Difficulty(
        ghost_speed=80.0,
        scared_speed=50.0,
        player_speed=100.0,
        wall_density=0.2,
        power_duration=8000.0,
        lives=3,
        ghost_aggression=0.6,
    ),
    "hell": Difficulty(
        ghost_speed=110.0,
        scared_speed=70.0,
        player_speed=90.0,
        wall_density=0.35,
        power_duration=5000.0,
        lives=1,
        ghost_aggression=0.9,
    ),
}

DEFAULT_DIFFICULTY = "human"

# Colors (RGB)
COLOR_BG = (0, 0, 0)
COLOR_WALL = (30, 64, 175)
COLOR_WALL_EDGE = (96, 165, 250)
COLOR_PELLET = (240, 240, 240)
COLOR_POWER = (255, 200, 160)
COLOR_PLAYER = (255, 255, 0)
COLOR_GHOST_SCARED = (65, 105, 225)
COLOR_GHOST_RETURNING = (230, 230, 230)
COLOR_GHOST_EYES = (255, 255, 255)
COLOR_TEXT = (220, 220, 220)
COLOR_HUD = (15, 15, 15)

GHOST_COLORS = [
    (255, 60, 60),
    (255, 140, 200),
    (60, 220, 255),
    (255, 170, 60),
]

# Render sizes
PELLET_RADIUS = 2
POWER_RADIUS = 5
PLAYER_MOUTH_DEG = 60
PLAYER_ARC_STEPS = 12
