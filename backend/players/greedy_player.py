"""
Greedy player - heads for the nearest food.
"""

import math
from typing import List, Optional

from domain.constants import UP, LEFT, RIGHT, ANGULAR, DIRECTION_DELTAS
from domain.game_state import SimulationState
from domain.snake import Segment
from engine import continuous, grid
from .base import Player
from .random_player import grid_safe_moves, continuous_safe_moves


class GreedyPlayer(Player):
    """
    Steps toward the closest food. It only picks moves that keep the snake
    clear of walls and its body (this tick on grids, over a short lookahead in
    continuous mode); on wrapping boards distances are measured the short way
    round.
    """

    def _grid_distance(self, a: Segment, b: Segment) -> int:
        dx = abs(a[0] - b[0])
        dy = abs(a[1] - b[1])
        if self.config.wrap_edges:
            dx = min(dx, self.config.board_width - dx)
            dy = min(dy, self.config.board_height - dy)
        return dx + dy

    def get_move(self, state: SimulationState) -> Optional[str]:
        if not state.food:
            return None

        if self.config.is_grid:
            moves = grid_safe_moves(self.config, state)
            if not moves:
                return None

            def score(move: str) -> int:
                head = grid.next_head(self.config, state.snake.head, move)
                return min(self._grid_distance(head, food) for food in state.food)

            return min(moves, key=score)
        head = state.snake.head
        target = min(state.food, key=lambda food: continuous.distance(self.config, head, food))
        dx, dy = continuous.displacement(self.config, head, target)
        moves = continuous_safe_moves(self.config, state)

        if self.config.steering_mode == ANGULAR:
            return self._angular_move(state, dx, dy, moves)

        if not moves:
            return None

        # Distance left to the food after one tick of travel
        speed = max(state.snake.speed, self.config.min_speed)

        def remaining(move: str) -> float:
            mx, my = DIRECTION_DELTAS[move]
            return math.hypot(dx - mx * speed, dy - my * speed)

        return min(moves, key=remaining)

    def _angular_move(self, state: SimulationState, dx: float, dy: float, moves: List[str]) -> Optional[str]:
        wanted = math.atan2(dy, dx)
        # Signed smallest angle between heading and target
        delta = (wanted - state.snake.heading + math.pi) % (2 * math.pi) - math.pi
        preferred = None
        if abs(delta) >= self.config.turn_rate / 2:
            preferred = RIGHT if delta > 0 else LEFT

        # UP and DOWN only throttle, so they share the straight-ahead path
        straight_ok = UP in moves
        if preferred is None:
            if straight_ok or not moves:
                return None
            return LEFT if LEFT in moves else RIGHT

        if preferred in moves:
            return preferred
        if straight_ok:
            return None
        other = LEFT if preferred == RIGHT else RIGHT
        return other if other in moves else preferred
