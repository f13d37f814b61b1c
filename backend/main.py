"""
Headless runner for the SnakeSim core.

Composes the simulation core, an autopilot player, the game loop and
optional replay/video output, then plays one game and prints a JSON summary.

Usage examples (from backend/):

    python main.py --preset classic --player greedy --max-ticks 500
    python main.py --preset steering --seed 7 --save-replay completed_games/run.json
    python main.py --config my_variant.yaml --realtime --print-board
"""

import argparse
import json
import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from domain.config import SimulationConfig, load_config
from domain.presets import get_preset, AVAILABLE_PRESETS
from domain.game_state import SimulationState
from engine.core import SimulationCore
from players.registry import get_player_class, AVAILABLE_PLAYERS
from services.game_loop import GameLoop

load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {value!r}")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise SystemExit(f"{name} must be a number, got {value!r}")


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Preset or YAML file first, then command-line overrides."""
    if args.config:
        config = load_config(args.config)
    else:
        config = get_preset(args.preset)

    overrides: Dict[str, Any] = {}
    if args.width is not None:
        overrides["board_width"] = args.width
    if args.height is not None:
        overrides["board_height"] = args.height
    if args.tick_ms is not None:
        overrides["tick_interval_ms"] = args.tick_ms
    if overrides:
        config = config.with_overrides(**overrides)
    return config


def run_simulation(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Runs a single game with an autopilot player.

    Args:
        args: parsed command-line options (see build_parser)

    Returns:
        A dictionary summarizing the game (game_id, final_score, ticks, ...).
    """
    config = build_config(args)
    core = SimulationCore(config, seed=args.seed)

    player_class = get_player_class(args.player)
    player = player_class(config)

    loop = GameLoop(core, player=player)

    final_states: List[SimulationState] = []
    core.subscribe(final_states.append)

    if args.print_board:
        cell_size = 1 if config.is_grid else config.segment_spacing * 2
        loop.add_listener(lambda snapshot: print("\n" + snapshot.print_board(cell_size) + "\n"))

    state = loop.run(max_ticks=args.max_ticks, realtime=args.realtime)

    result = {
        "game_id": loop.game_id,
        "movement_model": config.movement_model,
        "player": player_class.__name__,
        "final_score": state.score,
        "ticks": state.tick_number,
        "length": len(state.snake),
        "is_game_over": state.is_game_over,
        "death_reason": state.death_reason,
    }

    if args.save_replay or args.video:
        replay_path = loop.save_replay(args.save_replay)
        result["replay_path"] = replay_path

        if args.video:
            from services.replay_renderer import ReplayRenderer

            renderer = ReplayRenderer(
                movement_model=config.movement_model,
                segment_radius=config.collision_radius / 2,
            )
            result["video_path"] = renderer.generate_video(loop.replay(), args.video)

    if final_states:
        logger.info("Final score %d after %d ticks", final_states[0].score, final_states[0].tick_number)

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a headless SnakeSim game with an autopilot player."
    )
    parser.add_argument("--preset", type=str, default=os.getenv("SNAKE_PRESET", "classic"),
                        choices=AVAILABLE_PRESETS,
                        help="Configuration preset (default: SNAKE_PRESET or 'classic')")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config file (optional 'preset' key plus field overrides)")
    parser.add_argument("--width", type=float, default=None,
                        help="Override board width (cells in grid mode, pixels otherwise)")
    parser.add_argument("--height", type=float, default=None,
                        help="Override board height")
    parser.add_argument("--player", type=str, default="greedy", choices=AVAILABLE_PLAYERS,
                        help="Autopilot player")
    parser.add_argument("--max-ticks", type=int, default=1000,
                        help="Stop after this many ticks")
    parser.add_argument("--seed", type=int, default=_env_int("SNAKE_SEED"),
                        help="Random seed for food placement (default: SNAKE_SEED)")
    parser.add_argument("--tick-ms", type=float, default=_env_float("SNAKE_TICK_MS"),
                        help="Override tick interval in milliseconds (default: SNAKE_TICK_MS)")
    parser.add_argument("--realtime", action="store_true",
                        help="Sleep between ticks instead of running as fast as possible")
    parser.add_argument("--print-board", action="store_true",
                        help="Print a text board after every tick")
    parser.add_argument("--save-replay", type=str, default=None,
                        help="Write the replay JSON to this path")
    parser.add_argument("--video", type=str, default=None,
                        help="Render the replay to this MP4 path")
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        result = run_simulation(args)
    except ValueError as e:
        parser.error(str(e))

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
