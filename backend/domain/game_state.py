"""
SimulationState entity - the full state of one game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .snake import Snake, Segment


class SimulationState:
    """
    Everything the simulation owns between two ticks.

    Attributes:
        snake: the Snake entity (segments, direction, velocity)
        food: list of food positions
        score: points collected so far
        is_game_over: set at the terminal transition, cleared only by a restart
        is_paused: while set, ticks leave the state untouched
        tick_number: ticks applied since the (re)start
        death_reason: 'wall' or 'self' once the game is over
        pending_direction: grid direction queued for the next tick
        width, height: board dimensions (cells or pixels)
    """

    def __init__(
        self,
        snake: Snake,
        food: List[Segment],
        width: float,
        height: float,
        score: int = 0,
        is_game_over: bool = False,
        is_paused: bool = False,
        tick_number: int = 0,
        death_reason: Optional[str] = None,
        pending_direction: Optional[str] = None,
    ):
        self.snake = snake
        self.food = food
        self.width = width
        self.height = height
        self.score = score
        self.is_game_over = is_game_over
        self.is_paused = is_paused
        self.tick_number = tick_number
        self.death_reason = death_reason
        self.pending_direction = pending_direction

    @property
    def direction(self) -> Optional[str]:
        return self.snake.direction

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.snake.velocity

    def copy(self) -> "SimulationState":
        """Return an independent copy; segments are immutable tuples."""
        return SimulationState(
            snake=self.snake.copy(),
            food=list(self.food),
            width=self.width,
            height=self.height,
            score=self.score,
            is_game_over=self.is_game_over,
            is_paused=self.is_paused,
            tick_number=self.tick_number,
            death_reason=self.death_reason,
            pending_direction=self.pending_direction,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation used for replays and renderers."""
        return {
            "tick_number": self.tick_number,
            "width": self.width,
            "height": self.height,
            "snake": [list(segment) for segment in self.snake.positions],
            "direction": self.snake.direction,
            "velocity": list(self.snake.velocity),
            "food": [list(position) for position in self.food],
            "score": self.score,
            "is_game_over": self.is_game_over,
            "is_paused": self.is_paused,
            "death_reason": self.death_reason,
        }

    def print_board(self, cell_size: float = 1) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        T = snake body
        H = snake head
        Row 0 is printed first; continuous positions are bucketed into
        cells of cell_size.
        """
        columns = max(1, int(self.width // cell_size))
        rows = max(1, int(self.height // cell_size))
        board = [['.' for _ in range(columns)] for _ in range(rows)]

        def place(position: Segment, marker: str):
            cx = int(position[0] // cell_size)
            cy = int(position[1] // cell_size)
            if 0 <= cx < columns and 0 <= cy < rows:
                board[cy][cx] = marker

        for position in self.food:
            place(position, 'F')

        # Draw tail first so the head wins on shared cells
        segments = list(self.snake.positions)
        for segment in reversed(segments[1:]):
            place(segment, 'T')
        if segments:
            place(segments[0], 'H')

        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        result.append(f"Score: {self.score}" + ("  GAME OVER" if self.is_game_over else "")
                      + ("  PAUSED" if self.is_paused else ""))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<SimulationState tick={self.tick_number}, food={self.food}, "
            f"length={len(self.snake)}, score={self.score}, game_over={self.is_game_over}>"
        )
