"""
Background Renderer

Paints the two-band background and stores it as PNG.
"""

from pathlib import Path
from typing import Union

from bannerbaker import logger
from bannerbaker.base.canvas import Canvas
from bannerbaker.core.defs import RGBA, ConfigError, OutputFormat
from bannerbaker.utils.image import save_image


def render_background(
    width: int, height: int, top: RGBA, bottom: RGBA, split_row: int = 198
) -> Canvas:
    """
    Fill a new canvas with two horizontal bands.

    The split is a fixed pixel row, it does not scale with ``height``.

    Args:
        width: Canvas width
        height: Canvas height
        top: Color of rows [0, split_row)
        bottom: Color of rows [split_row, height)
        split_row: First row of the bottom band

    Returns:
        Canvas: The painted canvas

    Raises:
        ConfigError: If the width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ConfigError(
            f"Cannot render a {width}x{height} background, "
            f"width and height must be positive"
        )
    canvas = Canvas(width, height)
    canvas.fill_rect(0, 0, width, split_row, tuple(top))
    canvas.fill_rect(0, split_row, width, height, tuple(bottom))
    logger.debug(f"Rendered {width}x{height} background split at row {split_row}")
    return canvas


def save_background(canvas: Canvas, output_path: Union[str, Path]) -> Path:
    """Write the background canvas. Always PNG, whatever the file extension."""
    return save_image(canvas.pixels, output_path, OutputFormat.PNG)
