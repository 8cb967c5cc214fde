"""
Game constants for Grid Snake.
"""

# Movement directions as (dx, dy) unit vectors. y grows downwards.
UP = (0, -1)
RIGHT = (1, 0)
LEFT = (-1, 0)
DOWN = (0, 1)
VALID_MOVES = {UP, RIGHT, LEFT, DOWN}

DIRECTION_NAMES = {
    UP: "UP",
    RIGHT: "RIGHT",
    LEFT: "LEFT",
    DOWN: "DOWN",
}

# Keyboard bindings, matched case-insensitively
KEY_BINDINGS = {
    "W": UP,
    "D": RIGHT,
    "A": LEFT,
    "S": DOWN,
    "UP": UP,
    "RIGHT": RIGHT,
    "LEFT": LEFT,
    "DOWN": DOWN,
}

# Game settings
GRID_SIZE = 20
START_BODY = [(5, 5), (4, 5), (3, 5)]
START_DIRECTION = RIGHT

# Tick interval in milliseconds
BASE_DURATION_MS = 200
MIN_DURATION_MS = 10
