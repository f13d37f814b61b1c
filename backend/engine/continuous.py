"""
Continuous movement model: velocity-driven head, smooth-follow body.

The head moves by its velocity every tick. Every other segment is pulled
toward the segment ahead of it whenever their distance exceeds
segment_spacing; smoothing_factor=1 closes the gap exactly, smaller values
ease it over several ticks. On wrapping boards the playable strip extends
wrap_margin past every edge and all distances are measured on the torus, so
segments straddling an edge keep following instead of being dragged across
the board.
"""

import logging
import math
import random
from typing import Collection, List, Optional, Tuple

from domain.config import SimulationConfig
from domain.constants import (
    UP, DOWN, LEFT, RIGHT, INSTANT, DEATH_WALL, DEATH_SELF,
)
from domain.game_state import SimulationState
from domain.snake import Snake, Segment
from .food import place_food

logger = logging.getLogger(__name__)


def initial_snake(config: SimulationConfig) -> Snake:
    """Horizontal snake centred on the board, moving right at initial_speed."""
    hx = config.board_width / 2
    hy = config.board_height / 2
    positions = [
        wrap_point(config, (hx - i * config.segment_spacing, hy))
        for i in range(config.base_length)
    ]
    return Snake(positions, direction=RIGHT, velocity=(config.initial_speed, 0.0))


# --------------------------------------------------
# Geometry
# --------------------------------------------------

def _period(config: SimulationConfig) -> Tuple[float, float]:
    margin = config.wrap_margin
    return config.board_width + 2 * margin, config.board_height + 2 * margin


def wrap_point(config: SimulationConfig, point: Segment) -> Segment:
    """Fold a point back into [-wrap_margin, size + wrap_margin) on wrapping boards."""
    if not config.wrap_edges:
        return point
    margin = config.wrap_margin
    period_x, period_y = _period(config)
    x = (point[0] + margin) % period_x - margin
    y = (point[1] + margin) % period_y - margin
    return (x, y)


def displacement(config: SimulationConfig, origin: Segment, target: Segment) -> Tuple[float, float]:
    """Vector from origin to target, taking the short way round on wrapping boards."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    if config.wrap_edges:
        period_x, period_y = _period(config)
        dx = (dx + period_x / 2) % period_x - period_x / 2
        dy = (dy + period_y / 2) % period_y - period_y / 2
    return dx, dy


def distance(config: SimulationConfig, a: Segment, b: Segment) -> float:
    return math.hypot(*displacement(config, a, b))


def outside_walls(config: SimulationConfig, point: Segment) -> bool:
    margin = config.wall_margin
    x, y = point
    return (x < margin or x > config.board_width - margin or
            y < margin or y > config.board_height - margin)


def cardinal_for(velocity: Tuple[float, float], fallback: Optional[str] = None) -> Optional[str]:
    """Dominant screen direction of a velocity vector."""
    vx, vy = velocity
    if vx == 0 and vy == 0:
        return fallback
    if abs(vx) >= abs(vy):
        return RIGHT if vx > 0 else LEFT
    return DOWN if vy > 0 else UP


# --------------------------------------------------
# Steering
# --------------------------------------------------

def _clamp_speed(config: SimulationConfig, speed: float) -> float:
    return max(config.min_speed, min(config.max_speed, speed))


def steer(snake: Snake, config: SimulationConfig, held: Collection[str]) -> Tuple[float, float]:
    """Return the velocity for this tick given the held directions."""
    vx, vy = snake.velocity
    speed = snake.speed

    if config.steering_mode == INSTANT:
        dx = (RIGHT in held) - (LEFT in held)
        dy = (DOWN in held) - (UP in held)
        if dx == 0 and dy == 0:
            if speed == 0:
                return (0.0, 0.0)
            scale = _clamp_speed(config, speed) / speed
            return (vx * scale, vy * scale)

        norm = math.hypot(dx, dy)
        ux, uy = dx / norm, dy / norm
        if speed > 0 and (ux * vx + uy * vy) / speed < -0.999:
            # Straight reversal would fold the head into the body
            return (vx, vy)
        new_speed = _clamp_speed(config, speed or config.initial_speed)
        return (ux * new_speed, uy * new_speed)

    heading = snake.heading if speed > 0 else 0.0
    if LEFT in held:
        heading -= config.turn_rate
    if RIGHT in held:
        heading += config.turn_rate

    new_speed = speed or config.initial_speed
    if UP in held:
        new_speed += config.acceleration
    if DOWN in held:
        new_speed -= config.acceleration
    new_speed = _clamp_speed(config, new_speed)
    return (math.cos(heading) * new_speed, math.sin(heading) * new_speed)


# --------------------------------------------------
# Body
# --------------------------------------------------

def follow(config: SimulationConfig, new_head: Segment, body: List[Segment]) -> List[Segment]:
    """
    Pull every segment after the head toward the one ahead of it.

    body is the previous segment list including the old head at index 0.
    """
    segments = [new_head]
    for current in body[1:]:
        ahead = segments[-1]
        dx, dy = displacement(config, ahead, current)
        dist = math.hypot(dx, dy)
        excess = dist - config.segment_spacing
        if excess > 0:
            pull = config.smoothing_factor * excess / dist
            current = wrap_point(config, (current[0] - dx * pull, current[1] - dy * pull))
        segments.append(current)
    return segments


def hits_self(config: SimulationConfig, segments: List[Segment]) -> bool:
    head = segments[0]
    return any(
        distance(config, head, segment) < config.collision_radius
        for segment in segments[config.self_collision_exclusion_index:]
    )


# --------------------------------------------------
# Tick
# --------------------------------------------------

def step_continuous(
    state: SimulationState,
    config: SimulationConfig,
    held: Collection[str],
    rng: random.Random,
) -> SimulationState:
    """
    Advance a continuous game by one tick and return the new state.

    1) Steer, then move the head by the velocity
    2) Wrap the head or end the game at the walls
    3) Let the body follow and test self-collision past the exclusion index
    4) Eat food within food_radius, append the growth batch at the tail
    5) Trim the tail to the score-based length cap
    """
    new_state = state.copy()
    snake = new_state.snake
    new_state.pending_direction = None
    new_state.tick_number += 1

    snake.velocity = steer(snake, config, held)
    snake.direction = cardinal_for(snake.velocity, snake.direction)

    old_head = snake.head
    raw_head = (old_head[0] + snake.velocity[0], old_head[1] + snake.velocity[1])

    if not config.wrap_edges and outside_walls(config, raw_head):
        return _end_game(new_state, DEATH_WALL)
    new_head = wrap_point(config, raw_head)

    segments = follow(config, new_head, list(snake.positions))
    if hits_self(config, segments):
        return _end_game(new_state, DEATH_SELF)

    eaten = [food for food in new_state.food if distance(config, new_head, food) < config.food_radius]
    for food in eaten:
        new_state.score += config.score_reward
        new_state.food.remove(food)
        segments.extend([segments[-1]] * config.growth_batch_size)
        new_state.food.append(place_food(config, rng, segments, new_state.food))
        logger.debug("Ate food at (%.1f, %.1f), score %d", food[0], food[1], new_state.score)

    cap = config.max_length(new_state.score)
    if cap is not None:
        del segments[max(cap, config.base_length):]

    snake.positions.clear()
    snake.positions.extend(segments)
    return new_state


def _end_game(new_state: SimulationState, reason: str) -> SimulationState:
    # Segments stay where they were before the fatal move
    new_state.is_game_over = True
    new_state.death_reason = reason
    return new_state
