"""
Random player implementation - picks random safe moves.
"""

import math
import random
from typing import List, Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_DELTAS, INSTANT
from domain.config import SimulationConfig
from domain.game_state import SimulationState
from domain.snake import Segment
from engine import continuous, grid
from .base import Player

# Ticks of travel checked ahead of the head in continuous mode
LOOKAHEAD_TICKS = 10


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids reversals, walls and
    self-collisions when it can.
    """

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None):
        super().__init__(config)
        self.rng = rng or random.Random()

    def safe_moves(self, state: SimulationState) -> List[str]:
        if self.config.is_grid:
            return grid_safe_moves(self.config, state)
        return continuous_safe_moves(self.config, state)

    def get_move(self, state: SimulationState) -> str:
        valid_moves = self.safe_moves(state)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)


def grid_safe_moves(config: SimulationConfig, state: SimulationState) -> List[str]:
    """
    Moves that neither reverse, leave a walled board nor run into the body.
    The tail cell counts as free because it moves away this tick.
    """
    body = list(state.snake.positions)
    moves: List[str] = []
    for move in sorted(VALID_MOVES):
        if not grid.accepts_direction(state.direction, move):
            continue
        head = grid.next_head(config, state.snake.head, move)
        x, y = head
        if not (0 <= x < config.board_width and 0 <= y < config.board_height):
            continue
        if head in body[:-1]:
            continue
        moves.append(move)
    return moves


def continuous_safe_moves(config: SimulationConfig, state: SimulationState) -> List[str]:
    """
    Held directions whose projected path stays clear of walls and the body
    for LOOKAHEAD_TICKS ticks.

    INSTANT steering: the four cardinal headings, minus the reversal the
    engine would ignore. ANGULAR steering: LEFT/RIGHT follow a turning arc,
    UP/DOWN only change speed and keep the current heading.
    """
    snake = state.snake
    speed = max(snake.speed, config.min_speed)
    heading = snake.heading if snake.speed > 0 else 0.0

    moves: List[str] = []
    for move in sorted(VALID_MOVES):
        if config.steering_mode == INSTANT:
            dx, dy = DIRECTION_DELTAS[move]
            if snake.speed > 0 and (dx * snake.velocity[0] + dy * snake.velocity[1]) / snake.speed < -0.999:
                continue
            path = project_path(config, snake.head, math.atan2(dy, dx), speed, 0.0)
        elif move in (LEFT, RIGHT):
            turn = config.turn_rate if move == RIGHT else -config.turn_rate
            path = project_path(config, snake.head, heading, speed, turn)
        else:
            path = project_path(config, snake.head, heading, speed, 0.0)

        if path_is_clear(config, state, path):
            moves.append(move)
    return moves


def project_path(
    config: SimulationConfig,
    head: Segment,
    heading: float,
    speed: float,
    turn: float,
) -> List[Segment]:
    """Head positions over the lookahead window, turning by `turn` radians per tick."""
    x, y = head
    points = []
    for _ in range(LOOKAHEAD_TICKS):
        heading += turn
        x += math.cos(heading) * speed
        y += math.sin(heading) * speed
        points.append((x, y))
    return points


def path_is_clear(config: SimulationConfig, state: SimulationState, path: List[Segment]) -> bool:
    if not config.wrap_edges and any(continuous.outside_walls(config, point) for point in path):
        return False

    body = list(state.snake.positions)[config.self_collision_exclusion_index:]
    clearance = config.collision_radius + max(state.snake.speed, config.min_speed)
    return not any(
        continuous.distance(config, point, segment) < clearance
        for point in path
        for segment in body
    )
