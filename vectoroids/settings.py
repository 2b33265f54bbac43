import math


WIDTH = 800
HEIGHT = 600
FPS = 60

HIGH_SCORE_PATH = "highscore.json"

SHIP_RADIUS = 15
ROTATION_SPEED = 5  # radians/sec
THRUST_POWER = 200
FRICTION = 0.99  # per tick
MAX_SPEED = 400
SHOOT_DELAY = 0.2
INVULNERABILITY_TIME = 2.0
DISINTEGRATION_TIME = 2.0
RESPAWN_DELAY = 2.0
FRAGMENT_DAMPING = 0.98
FRAGMENT_MAX_SPEED = 15
FRAGMENT_MAX_SPIN = 2

BULLET_SPEED = 500
BULLET_RADIUS = 2
BULLET_MAX_DISTANCE = 0.95  # fraction of the shorter screen side

ASTEROID_RADII = {
    "large": 40,
    "medium": 20,
    "small": 10,
}
ASTEROID_SCORES = {
    "large": 20,
    "medium": 50,
    "small": 100,
}
ASTEROID_CHILDREN = {
    "large": "medium",
    "medium": "small",
    "small": None,
}
ASTEROID_SPEED_RANGE = (50, 100)
ASTEROID_VERTICES = 8
ASTEROID_JITTER = 0.3
SPLIT_SPEED_FACTOR = 1.5
SPLIT_SPREAD = math.pi / 4

INITIAL_LIVES = 3
GAME_OVER_DELAY = 3.0
WAVE_CREATION_DELAY = 3.0
BACKGROUND_BEAT_DELAY = 0.5
BASE_ASTEROIDS = 3
EXTRA_LIFE_SCORE = 10000
DEFAULT_HIGH_SCORE = 7500
WAVE_SPAWN_SPREAD = math.pi / 4

SAMPLE_RATE = 22050
SOUND_VOLUME = 0.5
SILENT_DURATION = 0.5
BEAT_BASE_INTERVAL = 1.0
BEAT_MIN_INTERVAL = 0.25
THRUST_INTERVAL = 0.2
EXTRA_LIFE_BEEPS = 3
EXTRA_LIFE_BEEP_INTERVAL = 0.2

SOUND_POOLS = {
    "beat1": 2,
    "beat2": 2,
    "fire": 4,
    "bang_large": 4,
    "bang_medium": 4,
    "bang_small": 4,
    "wave_end": 2,
    "thrust": 2,
    "extra_life": 2,
}
SOUND_FILES = {
    "beat1": "beat1.wav",
    "beat2": "beat2.wav",
    "fire": "fire.wav",
    "bang_large": "bang-large.wav",
    "bang_medium": "bang-medium.wav",
    "bang_small": "bang-small.wav",
    "wave_end": "wave-end.wav",
    "thrust": "thrust.wav",
    "extra_life": "extra-life.wav",
}

JOY_AXIS_X = 0
JOY_AXIS_Y = 1
JOY_AXIS_DEADZONE = 0.5
JOY_FIRE_BUTTON = 0


COLORS = {
    "bg": (0, 0, 0),
    "ship": (255, 255, 255),
    "thrust": (255, 190, 120),
    "bullet": (255, 255, 255),
    "asteroid": (255, 255, 255),
    "ui": (255, 255, 255),
    "warning": (255, 140, 140),
}
