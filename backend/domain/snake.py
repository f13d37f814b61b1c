"""
Snake entity for the simulation core.
"""

import math
from collections import deque
from typing import List, Tuple, Optional, Union

Number = Union[int, float]
Segment = Tuple[Number, Number]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: current heading in grid mode (UP/DOWN/LEFT/RIGHT)
        velocity: per-tick head displacement (vx, vy) in continuous mode
    """

    def __init__(
        self,
        positions: List[Segment],
        direction: Optional[str] = None,
        velocity: Tuple[float, float] = (0.0, 0.0),
    ):
        self.positions = deque(positions)
        self.direction = direction
        self.velocity = velocity

    @property
    def head(self) -> Segment:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Segment:
        return self.positions[-1]

    @property
    def speed(self) -> float:
        return math.hypot(*self.velocity)

    @property
    def heading(self) -> float:
        """Heading angle in radians, 0 pointing along +x."""
        return math.atan2(self.velocity[1], self.velocity[0])

    def copy(self) -> "Snake":
        return Snake(list(self.positions), self.direction, self.velocity)

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self.positions)}, direction={self.direction}>"
