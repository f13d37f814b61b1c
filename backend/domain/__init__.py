"""
Domain entities for the SnakeSim simulation core.

This module contains the game entities and configuration that are
independent of scheduling, input devices and rendering.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_DELTAS,
    TOGGLE_PAUSE, RESTART,
    GRID, CONTINUOUS, INSTANT, ANGULAR,
    SCORE_REWARD, BASE_LENGTH,
)
from .snake import Snake
from .game_state import SimulationState
from .config import SimulationConfig, load_config, config_from_mapping
from .presets import get_preset, list_presets, AVAILABLE_PRESETS

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'DIRECTION_DELTAS',
    'TOGGLE_PAUSE', 'RESTART',
    'GRID', 'CONTINUOUS', 'INSTANT', 'ANGULAR',
    'SCORE_REWARD', 'BASE_LENGTH',
    'Snake',
    'SimulationState',
    'SimulationConfig',
    'load_config',
    'config_from_mapping',
    'get_preset',
    'list_presets',
    'AVAILABLE_PRESETS',
]
