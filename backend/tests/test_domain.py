"""
Tests for the domain package - entities, configuration and presets.
"""

import json
import os
import sys
from collections import deque

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    Snake,
    SimulationState,
    SimulationConfig,
    load_config,
    config_from_mapping,
    get_preset,
    list_presets,
    AVAILABLE_PRESETS,
    UP, DOWN, LEFT, RIGHT, OPPOSITES,
    GRID, CONTINUOUS, ANGULAR,
)


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)], direction=RIGHT)
        assert list(snake.positions) == [(5, 5), (4, 5), (3, 5)]
        assert isinstance(snake.positions, deque)
        assert snake.direction == RIGHT
        assert snake.velocity == (0.0, 0.0)

    def test_head_and_tail(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        assert snake.head == (5, 5)
        assert snake.tail == (3, 5)
        assert len(snake) == 3

    def test_speed_and_heading_follow_velocity(self):
        snake = Snake([(0, 0)], velocity=(0.0, 2.0))
        assert snake.speed == pytest.approx(2.0)
        assert snake.heading == pytest.approx(1.5707963, rel=1e-6)

    def test_copy_is_independent(self):
        snake = Snake([(5, 5), (4, 5)], direction=RIGHT)
        clone = snake.copy()
        clone.positions.appendleft((6, 5))
        clone.direction = UP
        assert list(snake.positions) == [(5, 5), (4, 5)]
        assert snake.direction == RIGHT


class TestSimulationState:
    """Tests for the SimulationState class."""

    def _state(self):
        return SimulationState(
            snake=Snake([(2, 1), (1, 1), (0, 1)], direction=RIGHT),
            food=[(4, 3)],
            width=5,
            height=4,
            score=20,
        )

    def test_defaults(self):
        state = self._state()
        assert state.is_game_over is False
        assert state.is_paused is False
        assert state.tick_number == 0
        assert state.death_reason is None
        assert state.pending_direction is None
        assert state.direction == RIGHT

    def test_copy_does_not_share_mutable_parts(self):
        state = self._state()
        clone = state.copy()
        clone.snake.positions.pop()
        clone.food.append((0, 0))
        clone.score = 99

        assert len(state.snake) == 3
        assert state.food == [(4, 3)]
        assert state.score == 20

    def test_to_dict_is_json_serializable(self):
        data = self._state().to_dict()
        encoded = json.dumps(data)
        assert '"score": 20' in encoded
        assert data["snake"] == [[2, 1], [1, 1], [0, 1]]
        assert data["food"] == [[4, 3]]
        assert data["direction"] == RIGHT

    def test_print_board_marks_head_body_and_food(self):
        board = self._state().print_board()
        lines = board.split("\n")

        # Four board rows plus the score line
        assert len(lines) == 5
        assert lines[1].split()[1:] == ['T', 'T', 'H', '.', '.']
        assert lines[3].split()[1:] == ['.', '.', '.', '.', 'F']
        assert lines[-1].startswith("Score: 20")

    def test_print_board_buckets_continuous_positions(self):
        state = SimulationState(
            snake=Snake([(25.0, 5.0), (15.0, 5.0)]),
            food=[(35.5, 25.0)],
            width=40,
            height=30,
            is_game_over=True,
        )
        lines = state.print_board(cell_size=10).split("\n")
        assert lines[0].split()[1:] == ['.', 'T', 'H', '.']
        assert lines[2].split()[1:] == ['.', '.', '.', 'F']
        assert "GAME OVER" in lines[-1]

    def test_repr(self):
        text = repr(self._state())
        assert "tick=0" in text
        assert "score=20" in text


class TestConstants:
    def test_opposites_are_symmetric(self):
        for direction, opposite in OPPOSITES.items():
            assert OPPOSITES[opposite] == direction
        assert OPPOSITES[UP] == DOWN
        assert OPPOSITES[LEFT] == RIGHT


class TestSimulationConfig:
    """Tests for SimulationConfig validation and helpers."""

    def test_defaults_are_a_valid_grid_config(self):
        config = SimulationConfig()
        assert config.movement_model == GRID
        assert config.is_grid
        assert config.score_reward == 10
        assert config.base_length == 5

    def test_unknown_movement_model_rejected(self):
        with pytest.raises(ValueError, match="movement model"):
            SimulationConfig(movement_model="HEX")

    def test_unknown_steering_mode_rejected(self):
        with pytest.raises(ValueError, match="steering mode"):
            SimulationConfig(steering_mode="TANK")

    def test_smoothing_factor_must_be_in_unit_interval(self):
        with pytest.raises(ValueError, match="smoothing_factor"):
            SimulationConfig(movement_model=CONTINUOUS, board_width=600, board_height=600,
                             smoothing_factor=0)
        with pytest.raises(ValueError, match="smoothing_factor"):
            SimulationConfig(movement_model=CONTINUOUS, board_width=600, board_height=600,
                             smoothing_factor=1.5)

    def test_speed_range_validated(self):
        with pytest.raises(ValueError, match="Speed range"):
            SimulationConfig(movement_model=CONTINUOUS, board_width=600, board_height=600,
                             min_speed=5, max_speed=2)

    def test_food_margin_must_leave_room(self):
        with pytest.raises(ValueError, match="food_margin"):
            SimulationConfig(board_width=10, board_height=10, food_margin=5)

    def test_walled_grid_must_fit_starting_snake(self):
        with pytest.raises(ValueError, match="does not fit"):
            SimulationConfig(board_width=6, board_height=6, wrap_edges=False, base_length=5)

    def test_wrapping_grid_must_fit_starting_snake(self):
        with pytest.raises(ValueError, match="does not fit"):
            SimulationConfig(board_width=4, board_height=10, wrap_edges=True, base_length=5)
        # A snake exactly as long as the board still fits
        assert SimulationConfig(board_width=5, board_height=5, base_length=5).wrap_edges is True

    def test_grid_board_needs_whole_cells(self):
        with pytest.raises(ValueError, match="whole-cell"):
            SimulationConfig(board_width=10.5)

    def test_growth_batch_must_be_positive(self):
        with pytest.raises(ValueError, match="growth_batch_size"):
            SimulationConfig(growth_batch_size=0)

    def test_with_overrides_validates_and_copies(self):
        config = SimulationConfig()
        bigger = config.with_overrides(board_width=30)
        assert bigger.board_width == 30
        assert config.board_width == 20

        with pytest.raises(ValueError, match="Unknown configuration keys"):
            config.with_overrides(colour="green")

    def test_max_length(self):
        config = SimulationConfig(movement_model=CONTINUOUS, board_width=600, board_height=600,
                                  score_divisor=3)
        assert config.max_length(0) == 5
        assert config.max_length(10) == 8
        assert config.max_length(25) == 13

        uncapped = config.with_overrides(score_divisor=None)
        assert uncapped.max_length(100) is None

    def test_spacing_tolerance(self):
        config = SimulationConfig(movement_model=CONTINUOUS, board_width=600, board_height=600,
                                  smoothing_factor=0.5, max_speed=4)
        assert config.spacing_tolerance == pytest.approx(4.0)
        assert config.with_overrides(smoothing_factor=1.0).spacing_tolerance == 0

    def test_to_dict_round_trips_through_mapping(self):
        config = get_preset("steering")
        assert config_from_mapping(config.to_dict()) == config


class TestPresets:
    """Tests for the preset registry."""

    def test_every_preset_builds(self):
        for key in AVAILABLE_PRESETS:
            assert isinstance(get_preset(key), SimulationConfig)

    def test_default_preset_is_classic_grid(self):
        config = get_preset(None)
        assert config == get_preset("classic")
        assert config.is_grid
        assert config.wrap_edges is True

    def test_preset_keys_are_case_insensitive(self):
        assert get_preset("  Smooth ") == get_preset("smooth")

    def test_unknown_preset_lists_available(self):
        with pytest.raises(ValueError, match="Available presets"):
            get_preset("hexagonal")

    def test_list_presets_describes_every_key(self):
        listed = list_presets()
        assert [item["key"] for item in listed] == AVAILABLE_PRESETS
        assert all(item["description"] for item in listed)

    def test_steering_preset(self):
        config = get_preset("steering")
        assert config.movement_model == CONTINUOUS
        assert config.steering_mode == ANGULAR
        assert config.self_collision_exclusion_index == 20


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_preset_with_overrides(self, tmp_path):
        path = tmp_path / "variant.yaml"
        path.write_text("preset: steering\nturn_rate: 0.2\nboard_width: 1000\n")

        config = load_config(path)
        assert config.steering_mode == ANGULAR
        assert config.turn_rate == 0.2
        assert config.board_width == 1000

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- classic\n- smooth\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("preset: classic\nboard_widht: 10\n")
        with pytest.raises(ValueError, match="board_widht"):
            load_config(path)
