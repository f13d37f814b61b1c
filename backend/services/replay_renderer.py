"""
Replay rendering for SnakeSim.

Draws recorded snapshots (SimulationState.to_dict()) with Pillow and encodes
a sequence of them to MP4 with MoviePy/FFmpeg:
- Board background with a grid in grid mode
- Snake body and head with eyes
- Food
- Score line and a game-over banner
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image, ImageDraw, ImageFont

from domain.constants import GRID

logger = logging.getLogger(__name__)

DEFAULT_FPS = 10
DEFAULT_CANVAS_SIZE = 600
SCORE_BAR_HEIGHT = 40


class ColorScheme:
    """Color configuration for rendered frames"""

    BACKGROUND = "#0A1A0A"
    GRID_LINE = "#143214"
    SNAKE = "#4F7022"
    FOOD = "#EA2014"
    EYE = "#FFFFFF"
    TEXT = "#FFFFFF"
    GAME_OVER = "#FF5555"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def darken_color(hex_color: str, amount: float = 0.3) -> Tuple[int, int, int]:
    """Darken a hex color by a given amount"""
    r, g, b = hex_to_rgb(hex_color)
    r = max(0, int(r * (1 - amount)))
    g = max(0, int(g * (1 - amount)))
    b = max(0, int(b * (1 - amount)))
    return (r, g, b)


class ReplayRenderer:
    """Render SnakeSim snapshots to images and videos"""

    def __init__(
        self,
        canvas_size: int = DEFAULT_CANVAS_SIZE,
        fps: int = DEFAULT_FPS,
        movement_model: str = GRID,
        segment_radius: float = 7.5,
    ):
        self.canvas_size = canvas_size
        self.fps = fps
        self.movement_model = movement_model
        self.segment_radius = segment_radius
        self.font = ImageFont.load_default()

    def _scale(self, frame: Dict[str, Any]) -> float:
        return self.canvas_size / max(frame["width"], frame["height"])

    def render_frame(self, frame: Dict[str, Any]) -> Image.Image:
        """Render a single snapshot dict"""
        scale = self._scale(frame)
        board_w = int(round(frame["width"] * scale))
        board_h = int(round(frame["height"] * scale))

        img = Image.new('RGB', (board_w, board_h + SCORE_BAR_HEIGHT), hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        if self.movement_model == GRID:
            self._draw_grid(draw, frame, scale, board_w, board_h)
            self._draw_grid_objects(draw, frame, scale)
        else:
            self._draw_continuous_objects(draw, frame, scale)

        status = f"Score: {frame['score']}  Tick: {frame['tick_number']}"
        draw.text((10, board_h + 12), status, fill=hex_to_rgb(ColorScheme.TEXT), font=self.font)
        if frame.get("is_game_over"):
            reason = frame.get("death_reason") or ""
            draw.text(
                (board_w // 2 - 40, board_h // 2),
                f"GAME OVER {reason}".strip(),
                fill=hex_to_rgb(ColorScheme.GAME_OVER),
                font=self.font,
            )
        return img

    def _draw_grid(self, draw: ImageDraw.ImageDraw, frame: Dict[str, Any], scale: float, board_w: int, board_h: int):
        for i in range(int(frame["width"]) + 1):
            x = int(i * scale)
            draw.line([x, 0, x, board_h], fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)
        for i in range(int(frame["height"]) + 1):
            y = int(i * scale)
            draw.line([0, y, board_w, y], fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)

    def _draw_cell(self, draw: ImageDraw.ImageDraw, x: float, y: float, size: float, color, padding: int = 1):
        """Draw a single cell (for snake body or food)"""
        left, top = int(x * size), int(y * size)
        draw.rectangle(
            [left + padding, top + padding, left + int(size) - padding, top + int(size) - padding],
            fill=color
        )

    def _draw_grid_objects(self, draw: ImageDraw.ImageDraw, frame: Dict[str, Any], scale: float):
        for fx, fy in frame["food"]:
            self._draw_cell(draw, fx, fy, scale, hex_to_rgb(ColorScheme.FOOD))

        snake = frame["snake"]
        for px, py in snake[1:]:
            self._draw_cell(draw, px, py, scale, hex_to_rgb(ColorScheme.SNAKE))

        if snake:
            hx, hy = snake[0]
            self._draw_cell(draw, hx, hy, scale, darken_color(ColorScheme.SNAKE, 0.3), padding=0)

            # Eyes
            eye_size = max(2, int(scale) // 5)
            eye_y = int(hy * scale) + int(scale) // 3
            for eye_x in (int(hx * scale) + int(scale) // 4, int(hx * scale) + 3 * int(scale) // 4 - eye_size):
                draw.ellipse([eye_x, eye_y, eye_x + eye_size, eye_y + eye_size], fill=hex_to_rgb(ColorScheme.EYE))

    def _draw_circle(self, draw: ImageDraw.ImageDraw, cx: float, cy: float, radius: float, color):
        draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=color)

    def _draw_continuous_objects(self, draw: ImageDraw.ImageDraw, frame: Dict[str, Any], scale: float):
        radius = self.segment_radius * scale
        for fx, fy in frame["food"]:
            self._draw_circle(draw, fx * scale, fy * scale, radius, hex_to_rgb(ColorScheme.FOOD))

        snake = frame["snake"]
        for px, py in reversed(snake[1:]):
            self._draw_circle(draw, px * scale, py * scale, radius * 0.8, hex_to_rgb(ColorScheme.SNAKE))

        if snake:
            hx, hy = snake[0]
            self._draw_circle(draw, hx * scale, hy * scale, radius, darken_color(ColorScheme.SNAKE, 0.3))
            eye = max(1.0, radius / 4)
            self._draw_circle(draw, hx * scale - radius / 3, hy * scale - radius / 3, eye, hex_to_rgb(ColorScheme.EYE))
            self._draw_circle(draw, hx * scale + radius / 3, hy * scale - radius / 3, eye, hex_to_rgb(ColorScheme.EYE))

    def generate_video(
        self,
        replay: Dict[str, Any],
        output_path: Optional[str] = None
    ) -> str:
        """
        Generate an MP4 from a replay dict (GameLoop.replay()).

        Returns:
            Path to the generated video file
        """
        metadata = replay.get("metadata", {})
        frames_data: List[Dict[str, Any]] = replay.get("frames", [])
        if not frames_data:
            raise ValueError("Replay has no frames to render")

        config = metadata.get("config") or {}
        if config.get("movement_model"):
            self.movement_model = config["movement_model"]

        game_id = metadata.get("game_id", "replay")
        logger.info("Rendering %d frames for game %s", len(frames_data), game_id)

        frames = [np.array(self.render_frame(frame)) for frame in frames_data]

        if output_path is None:
            output_path = os.path.join(tempfile.gettempdir(), f"{game_id}_replay.mp4")

        clip = ImageSequenceClip(frames, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info("Video created successfully at %s", output_path)
        return output_path


def load_replay(path: str) -> Dict[str, Any]:
    """Load a replay JSON written by GameLoop.save_replay()."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
