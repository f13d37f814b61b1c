"""
Simulation engine for SnakeSim.

Grid and continuous movement models behind a single SimulationCore.
"""

from .core import SimulationCore, step, initial_state
from .food import place_food, random_position

__all__ = [
    'SimulationCore',
    'step',
    'initial_state',
    'place_food',
    'random_position',
]
