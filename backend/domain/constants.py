"""
Game constants for SnakeSim.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: y grows downward
DIRECTION_DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Control events
TOGGLE_PAUSE = "TOGGLE_PAUSE"
RESTART = "RESTART"
CONTROL_EVENTS = {TOGGLE_PAUSE, RESTART}

# Movement models
GRID = "GRID"
CONTINUOUS = "CONTINUOUS"
MOVEMENT_MODELS = {GRID, CONTINUOUS}

# Steering modes (continuous only)
INSTANT = "INSTANT"
ANGULAR = "ANGULAR"
STEERING_MODES = {INSTANT, ANGULAR}

# Death reasons
DEATH_WALL = "wall"
DEATH_SELF = "self"

# Game settings
SCORE_REWARD = 10
BASE_LENGTH = 5
