"""
Tests for SimulationCore - pause, restart, queued directions and game-over notification.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import SimulationConfig, get_preset, UP, DOWN, LEFT, RIGHT
from engine import SimulationCore, step, initial_state


@pytest.fixture
def walled():
    # Snake starts at (5, 5) heading right and hits the wall on the fifth tick
    return SimulationConfig(board_width=10, board_height=10, wrap_edges=False)


def run_until_over(core, limit=100):
    for _ in range(limit):
        if core.is_game_over:
            break
        core.tick()
    return core.state


class TestInitialState:
    def test_grid_start(self):
        config = SimulationConfig()
        state = initial_state(config, random.Random(3))
        assert state.snake.head == (10, 10)
        assert len(state.snake) == config.base_length
        assert len(state.food) == 1
        assert state.food[0] not in state.snake.positions
        assert state.score == 0
        assert state.tick_number == 0

    def test_places_requested_food_count(self):
        config = SimulationConfig(num_food=4)
        state = initial_state(config, random.Random(3))
        assert len(state.food) == 4
        assert len(set(state.food)) == 4

    def test_same_seed_same_game(self):
        config = get_preset("smooth")
        first = SimulationCore(config, seed=11)
        second = SimulationCore(config, seed=11)
        for _ in range(30):
            first.tick({UP})
            second.tick({UP})
        assert first.state.to_dict() == second.state.to_dict()


class TestPause:
    def test_paused_tick_changes_nothing(self):
        core = SimulationCore(SimulationConfig(), seed=1)
        core.tick()
        assert core.toggle_pause() is True

        before = core.state.to_dict()
        for _ in range(5):
            core.tick()
        assert core.state.to_dict() == before

    def test_resume_continues(self):
        core = SimulationCore(SimulationConfig(), seed=1)
        core.toggle_pause()
        core.tick()
        assert core.state.tick_number == 0

        assert core.toggle_pause() is False
        core.tick()
        assert core.state.tick_number == 1

    def test_step_returns_paused_state_unchanged(self):
        config = SimulationConfig()
        state = initial_state(config, random.Random(0))
        state.is_paused = True
        assert step(state, config, UP, random.Random(0)) is state


class TestGameOver:
    def test_wall_ends_game_and_freezes(self, walled):
        core = SimulationCore(walled, seed=2)
        state = run_until_over(core)

        assert state.is_game_over is True
        assert state.death_reason == "wall"
        assert state.tick_number == 5

        frozen = core.state.to_dict()
        core.tick()
        core.tick(UP)
        assert core.state.to_dict() == frozen

    def test_subscribers_notified_once(self, walled):
        core = SimulationCore(walled, seed=2)
        finals = []
        core.subscribe(finals.append)

        run_until_over(core)
        core.tick()
        core.tick()

        assert len(finals) == 1
        assert finals[0].is_game_over is True
        assert finals[0].score == core.score

    def test_failing_subscriber_does_not_block_others(self, walled):
        core = SimulationCore(walled, seed=2)
        finals = []

        def broken(state):
            raise RuntimeError("boom")

        core.subscribe(broken)
        core.subscribe(finals.append)
        run_until_over(core)

        assert core.is_game_over
        assert len(finals) == 1

    def test_unsubscribe(self, walled):
        core = SimulationCore(walled, seed=2)
        finals = []
        core.subscribe(finals.append)
        core.unsubscribe(finals.append)
        run_until_over(core)
        assert finals == []

    def test_restart_resets_everything(self, walled):
        core = SimulationCore(walled, seed=2)
        run_until_over(core)

        state = core.restart()
        assert state.is_game_over is False
        assert state.score == 0
        assert state.tick_number == 0
        assert state.death_reason is None
        assert state.snake.head == (5, 5)
        assert core.tick().tick_number == 1


class TestDirections:
    def test_queued_turn_applies_on_next_tick(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        assert core.set_direction(UP) is True
        assert core.state.pending_direction == UP

        state = core.tick()
        assert state.snake.head == (10, 9)
        assert state.pending_direction is None

    def test_grid_reversal_rejected(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        assert core.set_direction(LEFT) is False
        assert core.state.pending_direction is None

    def test_unknown_direction_rejected(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        assert core.set_direction("NORTH") is False

    def test_latest_request_wins(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        core.set_direction(UP)
        core.set_direction(DOWN)
        assert core.tick().snake.head == (10, 11)

    def test_continuous_queued_direction(self):
        core = SimulationCore(get_preset("smooth"), seed=4)
        assert core.set_direction(DOWN) is True
        state = core.tick()
        assert state.direction == DOWN
        assert state.velocity[0] == pytest.approx(0.0)
        assert state.velocity[1] > 0

    def test_continuous_held_set(self):
        core = SimulationCore(get_preset("smooth"), seed=4)
        head = core.state.snake.head
        state = core.tick({RIGHT})
        assert state.snake.head[0] > head[0]

    def test_tick_and_restart_return_copies(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        state = core.tick()
        state.score = 999
        state.snake.positions.clear()
        assert core.score == 0
        assert len(core.state.snake) == 5

        fresh = core.restart()
        fresh.is_game_over = True
        assert core.is_game_over is False

    def test_snapshot_is_independent(self):
        core = SimulationCore(SimulationConfig(), seed=4)
        snapshot = core.snapshot()
        snapshot.snake.positions.clear()
        snapshot.score = 500
        assert len(core.state.snake) == 5
        assert core.score == 0
