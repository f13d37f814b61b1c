"""
Simulation configuration for SnakeSim.

A single SimulationConfig drives every variant of the game: discrete grid
movement or continuous smooth-follow movement, wrapping or walled boards,
instant or angular steering. Named presets live in domain.presets; YAML
files can start from a preset and override individual fields.
"""

import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import (
    GRID, CONTINUOUS, MOVEMENT_MODELS,
    INSTANT, STEERING_MODES,
    SCORE_REWARD, BASE_LENGTH,
)


@dataclass
class SimulationConfig:
    # Shared settings
    movement_model: str = GRID
    board_width: float = 20
    board_height: float = 20
    wrap_edges: bool = True
    growth_batch_size: int = 1
    score_reward: int = SCORE_REWARD
    base_length: int = BASE_LENGTH
    num_food: int = 1
    food_margin: float = 0
    avoid_snake_on_spawn: bool = True
    max_spawn_attempts: int = 100
    tick_interval_ms: float = 100

    # Continuous movement
    steering_mode: str = INSTANT
    initial_speed: float = 3.0
    min_speed: float = 1.0
    max_speed: float = 6.0
    acceleration: float = 0.1
    turn_rate: float = 0.12  # radians per tick
    segment_spacing: float = 8.0
    smoothing_factor: float = 1.0
    collision_radius: float = 15.0
    food_radius: float = 20.0
    self_collision_exclusion_index: int = 3
    score_divisor: Optional[float] = 3
    wrap_margin: float = 10.0
    wall_margin: float = 0.0

    def __post_init__(self):
        self.validate()

    @property
    def is_grid(self) -> bool:
        return self.movement_model == GRID

    @property
    def spacing_tolerance(self) -> float:
        """
        Largest distance beyond segment_spacing that two adjacent segments can
        drift apart with a damped smoothing factor.
        """
        return self.max_speed * (1.0 - self.smoothing_factor) / self.smoothing_factor

    def max_length(self, score: int) -> Optional[int]:
        """Length cap for continuous mode, None when uncapped."""
        if self.score_divisor is None:
            return None
        return self.base_length + int(math.floor(score / self.score_divisor))

    def validate(self) -> None:
        """Raise ValueError when the configuration cannot drive a simulation."""
        if self.movement_model not in MOVEMENT_MODELS:
            raise ValueError(
                f"Unknown movement model '{self.movement_model}'. "
                f"Expected one of: {', '.join(sorted(MOVEMENT_MODELS))}"
            )
        if self.steering_mode not in STEERING_MODES:
            raise ValueError(
                f"Unknown steering mode '{self.steering_mode}'. "
                f"Expected one of: {', '.join(sorted(STEERING_MODES))}"
            )
        if self.board_width <= 0 or self.board_height <= 0:
            raise ValueError(f"Board must be positive, got {self.board_width}x{self.board_height}")
        if self.base_length < 1:
            raise ValueError("base_length must be at least 1")
        if self.growth_batch_size < 1:
            raise ValueError("growth_batch_size must be at least 1")
        if self.num_food < 1:
            raise ValueError("num_food must be at least 1")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1")
        if 2 * self.food_margin >= min(self.board_width, self.board_height):
            raise ValueError(f"food_margin {self.food_margin} leaves no playable area")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")

        if self.is_grid:
            if int(self.board_width) != self.board_width or int(self.board_height) != self.board_height:
                raise ValueError("Grid boards need whole-cell dimensions")
            # The starting snake is laid out left of the centre column
            room = self.board_width if self.wrap_edges else self.board_width // 2 + 1
            if self.base_length > room:
                edges = "wrapping" if self.wrap_edges else "walled"
                raise ValueError(
                    f"Starting snake of length {self.base_length} does not fit a "
                    f"{self.board_width}-wide {edges} board"
                )
            return

        if not 0 < self.smoothing_factor <= 1:
            raise ValueError(f"smoothing_factor must be in (0, 1], got {self.smoothing_factor}")
        if self.min_speed < 0 or self.min_speed > self.max_speed:
            raise ValueError(
                f"Speed range is invalid: min_speed={self.min_speed}, max_speed={self.max_speed}"
            )
        if self.segment_spacing <= 0:
            raise ValueError("segment_spacing must be positive")
        if self.self_collision_exclusion_index < 1:
            raise ValueError("self_collision_exclusion_index must be at least 1")
        if self.score_divisor is not None and self.score_divisor <= 0:
            raise ValueError("score_divisor must be positive (or null to disable the cap)")

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a validated copy with the given fields replaced."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def config_from_mapping(data: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Build a config from a mapping with an optional 'preset' key.

    Any other keys override fields of the preset (or of the defaults when no
    preset is named).
    """
    from .presets import get_preset

    data = dict(data or {})
    preset_key = data.pop("preset", None)
    base = get_preset(preset_key) if preset_key else SimulationConfig()
    return base.with_overrides(**data)


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """
    Load a SimulationConfig from a YAML file.

    Example file::

        preset: steering
        board_width: 800
        turn_rate: 0.2
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    return config_from_mapping(data)
