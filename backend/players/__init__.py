"""
Input sources for SnakeSim.

This module contains the device-input mapping (keys, swipes) and the
autopilot players used to drive headless simulations.
"""

from .base import Player
from .random_player import RandomPlayer
from .greedy_player import GreedyPlayer
from .keyboard import event_for_key, direction_for_swipe
from .registry import get_player_class, list_players, AVAILABLE_PLAYERS

__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'event_for_key',
    'direction_for_swipe',
    'get_player_class',
    'list_players',
    'AVAILABLE_PLAYERS',
]
