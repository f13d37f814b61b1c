"""
Base player interface for headless input sources.
"""

from typing import Optional

from domain.config import SimulationConfig
from domain.game_state import SimulationState


class Player:
    """
    Base class/interface for autopilot input.

    Each player looks at a snapshot of the simulation and returns the
    direction it wants to hold for the next tick.
    """

    def __init__(self, config: SimulationConfig):
        self.config = config

    def get_move(self, state: SimulationState) -> Optional[str]:
        """
        Return a move direction given the current simulation state.

        Args:
            state: Read-only snapshot of the simulation

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT", or None to keep going
        """
        raise NotImplementedError
