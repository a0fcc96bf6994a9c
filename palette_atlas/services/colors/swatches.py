"""
Swatch Rendering Module

Renders extracted palettes and atlas grids to PNG images for clients that
display them. Output is base64-encoded PNG.
"""

import base64
from typing import List, Optional, Sequence, Set, Tuple

import cv2
import numpy as np
from loguru import logger

from .atlas import AtlasResult, BucketKey
from .conversion import hsl_to_rgb
from .models import HSL, RGB, hex_to_rgb

EMPTY_CELL_BGR = (247, 242, 242)
LEGEND_HEIGHT = 6


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    rgb = hex_to_rgb(hex_color)
    return (rgb.b, rgb.g, rgb.r)


def _encode_png(img: np.ndarray, what: str) -> str:
    success, buffer = cv2.imencode('.png', img)
    if not success:
        logger.error(f"Failed to encode {what} as PNG")
        raise RuntimeError(f"{what} encoding failed")
    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded {what}: {img.shape[1]}×{img.shape[0]} -> {len(b64_string)} chars")
    return b64_string


def render_swatch_strip(colors: Sequence[RGB],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_color: Tuple[int, int, int] = (0, 0, 0),
                        border_width: int = 2) -> str:
    """
    Render a horizontal strip of palette swatches.

    Args:
        colors: Palette colors in display order
        chip_size: Size of each color chip in pixels
        highlight_index: Index of color to highlight with border
        border_color: BGR color for highlight border
        border_width: Width of highlight border in pixels

    Returns:
        Base64-encoded PNG image string
    """
    validate_swatch_params(colors, chip_size, highlight_index)

    k = len(colors)
    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)

    for i, color in enumerate(colors):
        x_start = i * chip_size
        img[:, x_start:x_start + chip_size, :] = (color.b, color.g, color.r)

    if highlight_index is not None:
        x_start = highlight_index * chip_size
        cv2.rectangle(
            img,
            (x_start, 0),
            (x_start + chip_size - 1, chip_size - 1),
            border_color,
            border_width
        )

    return _encode_png(img, "swatch strip")


def render_atlas_grid(result: AtlasResult,
                      cell_size: int = 32,
                      spacing: int = 4,
                      show_counts: bool = True,
                      font_scale: float = 0.35,
                      favorites: Optional[Set[BucketKey]] = None) -> str:
    """
    Render an atlas as a square-celled grid.

    Rows run from the highest y index at the top to 0 at the bottom. Occupied
    cells are filled with their representative color and labelled with the
    member count; empty cells are drawn in a neutral background. A thin hue
    legend runs along the bottom edge.

    Args:
        result: Aggregated atlas
        cell_size: Edge of each cell in pixels
        spacing: Gap between cells in pixels
        show_counts: Whether to overlay member counts
        font_scale: Font scale for count text
        favorites: Bucket keys to outline as favorites

    Returns:
        Base64-encoded PNG image string
    """
    if cell_size <= 0:
        raise ValueError("cell_size must be positive")

    cols, rows = result.hue_bins, result.y_bins
    pitch = cell_size + spacing
    grid_w = cols * pitch - spacing
    grid_h = rows * pitch - spacing
    img = np.full((grid_h + spacing + LEGEND_HEIGHT, grid_w, 3), 255, dtype=np.uint8)

    logger.debug(f"Rendering atlas grid {cols}×{rows}, cell_size={cell_size}")

    for row, cells in enumerate(result.grid()):
        y_index = rows - 1 - row
        y_start = row * pitch
        for hue_index, data in enumerate(cells):
            x_start = hue_index * pitch
            top_left = (x_start, y_start)
            bottom_right = (x_start + cell_size - 1, y_start + cell_size - 1)

            if data is None or data.representative is None:
                cv2.rectangle(img, top_left, bottom_right, EMPTY_CELL_BGR, -1)
                continue

            bgr_color = hex_to_bgr(data.representative.hex)
            cv2.rectangle(img, top_left, bottom_right, bgr_color, -1)

            if favorites and BucketKey(hue_index, y_index) in favorites:
                cv2.rectangle(img, top_left, bottom_right, (180, 105, 255), 2)

            if show_counts:
                text = str(data.count)
                text_color = (255, 255, 255) if sum(bgr_color) < 384 else (0, 0, 0)
                text_size = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, font_scale, 1)[0]
                cv2.putText(
                    img, text,
                    (x_start + cell_size - text_size[0] - 3, y_start + cell_size - 3),
                    cv2.FONT_HERSHEY_SIMPLEX, font_scale, text_color, 1
                )

    # Hue legend: mid-column hue at full saturation
    legend_top = grid_h + spacing
    for hue_index in range(cols):
        hue = (hue_index + 0.5) * 360.0 / cols
        legend = hsl_to_rgb(HSL(hue, 1.0, 0.5))
        x_start = hue_index * pitch
        img[legend_top:, x_start:x_start + cell_size, :] = (legend.b, legend.g, legend.r)

    return _encode_png(img, "atlas grid")


def validate_swatch_params(colors: List[RGB], chip_size: int, highlight_index: Optional[int]) -> None:
    """Validate swatch rendering parameters."""
    if not colors:
        raise ValueError("colors cannot be empty")

    if chip_size <= 0:
        raise ValueError("chip_size must be positive")

    if highlight_index is not None and (highlight_index < 0 or highlight_index >= len(colors)):
        raise ValueError(f"highlight_index {highlight_index} out of range [0, {len(colors)})")
