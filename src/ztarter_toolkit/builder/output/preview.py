"""
Module: builder.output.preview

Purpose:
    Debug rendering of a generated level. Draws each placed polygon as
    an outline so a batch can be eyeballed without opening the game.

Key Functions:
    - render_preview(): Create the preview image
    - save_preview(): Render and save to disk as PNG

Dependencies:
    - PIL: Image drawing

Used By:
    - builder.controller: Optional preview output
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw

from ..assembler import GeneratedLevel

logger = logging.getLogger(__name__)

# Visualization constants
BACKGROUND_COLOR = (255, 255, 255)
OUTLINE_COLORS = [
    (220, 20, 60),     # Crimson - anchor
    (30, 144, 255),    # Dodger blue
    (34, 139, 34),     # Forest green
    (255, 140, 0),     # Dark orange
    (128, 0, 128),     # Purple
]
LINE_WIDTH = 2
MARGIN_PX = 10
MAX_SIZE_PX = 1600


def render_preview(level: GeneratedLevel, *, max_size: int = MAX_SIZE_PX) -> Image.Image:
    """
    Render a generated level to an image.

    The level is scaled to fit max_size on its longer side. Level y grows
    upward, image y grows downward, so y is flipped.

    Args:
        level: Level to draw
        max_size: Longest side of the drawing area in pixels

    Returns:
        RGB image with one outline per placed polygon
    """
    width = max(level.total_width, 1e-9)
    height = max((p.height for p in level.polygons), default=0.0) or 1e-9
    scale = max_size / max(width, height)

    canvas = (
        int(width * scale) + 2 * MARGIN_PX + 1,
        int(height * scale) + 2 * MARGIN_PX + 1,
    )
    image = Image.new("RGB", canvas, BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for i, polygon in enumerate(level.polygons):
        points = [
            (MARGIN_PX + v.x * scale, canvas[1] - MARGIN_PX - v.y * scale)
            for v in polygon.vertices
        ]
        color = OUTLINE_COLORS[0] if i == 0 else OUTLINE_COLORS[1 + (i - 1) % (len(OUTLINE_COLORS) - 1)]
        if len(points) >= 2:
            draw.line(points + [points[0]], fill=color, width=LINE_WIDTH)
        elif points:
            draw.point(points, fill=color)

    return image


def save_preview(level: GeneratedLevel, path: Path) -> Path:
    """
    Render a level preview and save it as PNG.

    Args:
        level: Level to draw
        path: Output file (parent directories are created)

    Returns:
        Path to the saved image
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_preview(level).save(path, format="PNG")
    logger.debug(f"Saved preview: {path}")
    return path
