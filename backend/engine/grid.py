"""
Grid movement model: one cell per tick, classic tail-keeping growth.
"""

import logging
import random
from typing import List, Optional

from domain.config import SimulationConfig
from domain.constants import (
    RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_DELTAS, DEATH_WALL, DEATH_SELF,
)
from domain.game_state import SimulationState
from domain.snake import Snake, Segment
from .food import place_food

logger = logging.getLogger(__name__)


def initial_snake(config: SimulationConfig) -> Snake:
    """Horizontal snake centred on the board, heading RIGHT."""
    width = int(config.board_width)
    height = int(config.board_height)
    hx, hy = width // 2, height // 2
    positions = [((hx - i) % width, hy) for i in range(config.base_length)]
    return Snake(positions, direction=RIGHT)


def accepts_direction(current: Optional[str], requested: Optional[str]) -> bool:
    """Unknown directions and reversals are dropped."""
    if requested not in VALID_MOVES:
        return False
    return current is None or OPPOSITES[requested] != current


def next_head(config: SimulationConfig, head: Segment, direction: str) -> Segment:
    dx, dy = DIRECTION_DELTAS[direction]
    x, y = head[0] + dx, head[1] + dy
    if config.wrap_edges:
        x %= int(config.board_width)
        y %= int(config.board_height)
    return (x, y)


def _in_bounds(config: SimulationConfig, cell: Segment) -> bool:
    x, y = cell
    return 0 <= x < config.board_width and 0 <= y < config.board_height


def step_grid(
    state: SimulationState,
    config: SimulationConfig,
    direction: Optional[str],
    rng: random.Random,
) -> SimulationState:
    """
    Advance a grid game by one tick and return the new state.

    1) Resolve the heading (explicit input wins over the queued direction)
    2) Move the head one cell, wrapping on toroidal boards
    3) Build the proposed body (tail kept when eating)
    4) Walls and self-collision end the game without moving the snake
    5) Commit, score and replace eaten food
    """
    new_state = state.copy()
    snake = new_state.snake

    requested = direction if direction is not None else state.pending_direction
    new_state.pending_direction = None
    if requested is not None:
        if accepts_direction(snake.direction, requested):
            snake.direction = requested
        else:
            logger.debug("Ignoring direction %s while heading %s", requested, snake.direction)

    head = next_head(config, snake.head, snake.direction)
    new_state.tick_number += 1

    if not config.wrap_edges and not _in_bounds(config, head):
        return _end_game(new_state, DEATH_WALL)

    eats = head in new_state.food
    original_body = list(snake.positions)
    if eats:
        proposed: List[Segment] = [head] + original_body
        proposed.extend([original_body[-1]] * (config.growth_batch_size - 1))
    else:
        proposed = [head] + original_body[:-1]

    if head in proposed[1:]:
        return _end_game(new_state, DEATH_SELF)

    snake.positions.clear()
    snake.positions.extend(proposed)

    if eats:
        new_state.score += config.score_reward
        new_state.food.remove(head)
        new_state.food.append(place_food(config, rng, proposed, new_state.food))
        logger.debug("Ate food at %s, score %d", head, new_state.score)

    return new_state


def _end_game(new_state: SimulationState, reason: str) -> SimulationState:
    # Segments stay where they were before the fatal move
    new_state.is_game_over = True
    new_state.death_reason = reason
    return new_state
