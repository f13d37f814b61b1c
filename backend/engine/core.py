"""
SimulationCore - owner of the single SimulationState.

The tick itself is the pure function `step(state, config, inputs, rng)`; the
core keeps the current state, records queued directions, handles pause and
restart, and notifies subscribers once when a game ends.
"""

import logging
import random
from typing import Callable, Collection, List, Optional, Union

from domain.config import SimulationConfig
from domain.constants import VALID_MOVES
from domain.game_state import SimulationState
from . import continuous, grid
from .food import place_food

logger = logging.getLogger(__name__)

Inputs = Union[None, str, Collection[str]]
GameOverCallback = Callable[[SimulationState], None]


def initial_state(config: SimulationConfig, rng: random.Random) -> SimulationState:
    """Fixed starting snake plus freshly placed food."""
    module = grid if config.is_grid else continuous
    snake = module.initial_snake(config)

    food = []
    for _ in range(config.num_food):
        food.append(place_food(config, rng, snake.positions, food))

    return SimulationState(
        snake=snake,
        food=food,
        width=config.board_width,
        height=config.board_height,
    )


def _grid_direction(inputs: Inputs) -> Optional[str]:
    if inputs is None or isinstance(inputs, str):
        return inputs
    # Latest entry of an ordered batch wins
    ordered = list(inputs)
    return ordered[-1] if ordered else None


def _held_directions(inputs: Inputs, pending: Optional[str]) -> Collection[str]:
    if inputs is None:
        held = set()
    elif isinstance(inputs, str):
        held = {inputs}
    else:
        held = set(inputs)
    # A queued direction acts as a one-tick key press
    if pending:
        held.add(pending)
    return held


def step(
    state: SimulationState,
    config: SimulationConfig,
    inputs: Inputs,
    rng: random.Random,
) -> SimulationState:
    """
    Compute the state after one tick. The given state is never mutated.

    Paused and finished games come back unchanged.
    """
    if state.is_paused or state.is_game_over:
        return state

    if config.is_grid:
        return grid.step_grid(state, config, _grid_direction(inputs), rng)

    return continuous.step_continuous(
        state, config, _held_directions(inputs, state.pending_direction), rng
    )


class SimulationCore:
    """
    Local snake simulation.

    Usage:
        core = SimulationCore(get_preset("classic"), seed=42)
        core.set_direction(UP)
        state = core.tick()
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(seed)
        self._subscribers: List[GameOverCallback] = []
        self.state = initial_state(self.config, self.rng)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def is_game_over(self) -> bool:
        return self.state.is_game_over

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    def tick(self, inputs: Inputs = None) -> SimulationState:
        """
        Advance by exactly one tick.

        Args:
            inputs: grid mode - the latest direction (or None to use the
                    queued one); continuous mode - the set of held directions.

        Returns:
            A snapshot of the new state.
        """
        previous = self.state
        self.state = step(previous, self.config, inputs, self.rng)

        if self.state.is_game_over and not previous.is_game_over:
            logger.info(
                "Game over after %d ticks (%s), final score %d",
                self.state.tick_number, self.state.death_reason, self.state.score,
            )
            self._notify_game_over()

        return self.snapshot()

    def set_direction(self, direction: str) -> bool:
        """
        Queue a direction for the next tick.

        Returns False when the request was dropped (unknown direction or a
        reversal in grid mode).
        """
        if direction not in VALID_MOVES:
            logger.debug("Ignoring unknown direction %r", direction)
            return False
        if self.config.is_grid and not grid.accepts_direction(self.state.direction, direction):
            logger.debug("Ignoring reversal to %s while heading %s", direction, self.state.direction)
            return False

        self.state = self.state.copy()
        self.state.pending_direction = direction
        return True

    def toggle_pause(self) -> bool:
        self.state = self.state.copy()
        self.state.is_paused = not self.state.is_paused
        logger.info("Simulation %s", "paused" if self.state.is_paused else "resumed")
        return self.state.is_paused

    def restart(self) -> SimulationState:
        self.state = initial_state(self.config, self.rng)
        logger.info("Simulation restarted")
        return self.snapshot()

    def snapshot(self) -> SimulationState:
        """Independent copy for renderers and other collaborators."""
        return self.state.copy()

    def subscribe(self, callback: GameOverCallback):
        """Register a callback invoked with the final state when a game ends."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: GameOverCallback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify_game_over(self):
        final_state = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(final_state)
            except Exception as e:
                # Subscribers must not be able to break the simulation
                logger.exception("Game-over subscriber %r failed: %s", callback, e)
