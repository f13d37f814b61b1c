"""
Food placement.

Food is drawn uniformly from the playable area (the board inset by
food_margin). When the config asks to avoid the snake, placement retries a
bounded number of times and then falls back instead of raising.
"""

import logging
import math
import random
from typing import Iterable, List, Sequence

from domain.config import SimulationConfig
from domain.snake import Segment

logger = logging.getLogger(__name__)


def random_position(config: SimulationConfig, rng: random.Random) -> Segment:
    """Uniform draw inside the margin: whole cells in grid mode, floats otherwise."""
    margin = config.food_margin
    if config.is_grid:
        m = int(margin)
        x = rng.randint(m, int(config.board_width) - 1 - m)
        y = rng.randint(m, int(config.board_height) - 1 - m)
        return (x, y)

    x = rng.uniform(margin, config.board_width - margin)
    y = rng.uniform(margin, config.board_height - margin)
    return (x, y)


def is_free(config: SimulationConfig, position: Segment, occupied: Sequence[Segment]) -> bool:
    if config.is_grid:
        return position not in occupied

    clearance = config.collision_radius + config.food_radius
    px, py = position
    return all(math.hypot(px - ox, py - oy) >= clearance for ox, oy in occupied)


def _free_cells(config: SimulationConfig, occupied: Sequence[Segment]) -> List[Segment]:
    m = int(config.food_margin)
    taken = set(occupied)
    return [
        (x, y)
        for y in range(m, int(config.board_height) - m)
        for x in range(m, int(config.board_width) - m)
        if (x, y) not in taken
    ]


def place_food(
    config: SimulationConfig,
    rng: random.Random,
    snake_positions: Iterable[Segment],
    existing_food: Iterable[Segment] = (),
) -> Segment:
    """
    Return a new food position.

    Grid mode never stacks food on food; both modes avoid the snake when
    avoid_snake_on_spawn is set. After max_spawn_attempts misses, grid mode
    takes the first free cell of a board scan and continuous mode keeps the
    last draw.
    """
    occupied: List[Segment] = list(existing_food) if config.is_grid else []
    if config.avoid_snake_on_spawn:
        occupied.extend(snake_positions)

    position = random_position(config, rng)
    if not occupied:
        return position

    for _ in range(config.max_spawn_attempts):
        if is_free(config, position, occupied):
            return position
        position = random_position(config, rng)

    if is_free(config, position, occupied):
        return position

    if config.is_grid:
        free = _free_cells(config, occupied)
        if free:
            return free[0]

    logger.debug("No free spot for food after %d attempts, using %s", config.max_spawn_attempts, position)
    return position
