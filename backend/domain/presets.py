"""
Registry of configuration presets.

Maps preset keys (e.g., 'classic', 'smooth') to SimulationConfig factories.
Each preset reproduces one of the game's product variants on top of the single
configurable core. To add a variant, write a factory below and register it in
PRESET_FACTORIES and PRESET_DESCRIPTIONS.
"""

from typing import Callable, Dict, List, Optional

from .config import SimulationConfig
from .constants import GRID, CONTINUOUS, INSTANT, ANGULAR


def _classic() -> SimulationConfig:
    # 40x40 tiles wrapping at the edges, one cell of growth per fruit
    return SimulationConfig(
        movement_model=GRID,
        board_width=40,
        board_height=40,
        wrap_edges=True,
        growth_batch_size=1,
        tick_interval_ms=100,
    )


def _walled() -> SimulationConfig:
    return SimulationConfig(
        movement_model=GRID,
        board_width=20,
        board_height=20,
        wrap_edges=False,
        growth_batch_size=1,
        tick_interval_ms=100,
    )


def _smooth() -> SimulationConfig:
    # 600x600 canvas, hard walls, cardinal turns, 3 segments per fruit
    return SimulationConfig(
        movement_model=CONTINUOUS,
        board_width=600,
        board_height=600,
        wrap_edges=False,
        steering_mode=INSTANT,
        growth_batch_size=3,
        food_margin=20,
        initial_speed=3.0,
        min_speed=3.0,
        max_speed=3.0,
        segment_spacing=8.0,
        smoothing_factor=1.0,
        collision_radius=15.0,
        food_radius=20.0,
        self_collision_exclusion_index=3,
        tick_interval_ms=20,
    )


def _wrapping() -> SimulationConfig:
    return _smooth().with_overrides(
        wrap_edges=True,
        wrap_margin=10.0,
        smoothing_factor=0.5,
    )


def _steering() -> SimulationConfig:
    return SimulationConfig(
        movement_model=CONTINUOUS,
        board_width=800,
        board_height=600,
        wrap_edges=True,
        steering_mode=ANGULAR,
        growth_batch_size=5,
        food_margin=50,
        initial_speed=2.5,
        min_speed=1.5,
        max_speed=5.0,
        acceleration=0.1,
        turn_rate=0.12,
        segment_spacing=5.0,
        smoothing_factor=0.6,
        collision_radius=10.0,
        food_radius=22.0,
        self_collision_exclusion_index=20,
        score_divisor=2,
        wrap_margin=15.0,
        tick_interval_ms=1000 / 60,
    )


PRESET_FACTORIES: Dict[str, Callable[[], SimulationConfig]] = {
    "classic": _classic,
    "walled": _walled,
    "smooth": _smooth,
    "wrapping": _wrapping,
    "steering": _steering,
}

PRESET_DESCRIPTIONS: Dict[str, str] = {
    "classic": "Grid snake on a 40x40 wrapping board",
    "walled": "Grid snake on a 20x20 board with deadly walls",
    "smooth": "Continuous smooth-follow snake with walls and cardinal turns",
    "wrapping": "Continuous snake that wraps around the edges with damped body easing",
    "steering": "Continuous snake steered by angular turns and throttle on a wrapping board",
}

# Canonical list of available preset keys
AVAILABLE_PRESETS = list(PRESET_FACTORIES.keys())

DEFAULT_PRESET = "classic"


def get_preset(preset_key: Optional[str] = None) -> SimulationConfig:
    """
    Build the config for a preset key.

    Args:
        preset_key: One of AVAILABLE_PRESETS. If None or empty, returns the default.

    Raises:
        ValueError: If preset_key is not recognized.
    """
    if not preset_key or preset_key.strip() == "":
        preset_key = DEFAULT_PRESET

    preset_key = preset_key.strip().lower()

    if preset_key not in PRESET_FACTORIES:
        available = ", ".join(AVAILABLE_PRESETS)
        raise ValueError(f"Unknown preset '{preset_key}'. Available presets: {available}")

    return PRESET_FACTORIES[preset_key]()


def list_presets() -> List[Dict[str, str]]:
    """Return key/description metadata about every preset."""
    return [{"key": key, "description": PRESET_DESCRIPTIONS[key]} for key in AVAILABLE_PRESETS]
