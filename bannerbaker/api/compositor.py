"""
Compositor

Stacks the background, the two base images and both icon rows on one canvas.
"""

from typing import Optional, Sequence, Tuple

from bannerbaker import logger
from bannerbaker.base.canvas import BlendMode, Canvas
from bannerbaker.core.configs import BakerConfig, RowConfig
from bannerbaker.core.defs import LoadedAssets, Placement, RasterImage
from bannerbaker.utils.image import resize_image


def calc_size(
    count: int,
    adjustment: int = 0,
    base_width: int = 1064,
    scale_numerator: int = 100,
    scale_denominator: int = 115,
) -> Tuple[int, int]:
    """
    Compute the shared icon edge and horizontal step for a crowded row.

    ``step`` is ``(base_width + adjustment) / count`` truncated to an integer,
    the edge is ``step * 100 / 115`` truncated. For 5 icons and no adjustment
    this gives a step of 212 and an edge of 184.

    Args:
        count: Number of icons in the row, must be positive
        adjustment: Added to ``base_width`` before dividing

    Returns:
        Tuple[int, int]: (edge, step); the edge is at least 1 pixel
    """
    if count <= 0:
        raise ValueError(f"Icon count must be positive, got {count}")
    step = int((base_width + adjustment) / count)
    edge = int(step / scale_denominator * scale_numerator)
    return max(edge, 1), step


def layout_row(
    icons: Sequence[RasterImage], row: RowConfig, config: Optional[BakerConfig] = None
) -> list[Placement]:
    """
    Place a row of icons from left to right.

    Rows of up to ``native_limit`` icons keep their decoded size and advance by
    ``native_step`` whatever the icon width. Longer rows are resized to a
    common square edge from :func:`calc_size` and advance by its step.

    Args:
        icons: Icons in draw order
        row: Start position and width adjustment of the row
        config: Layout constants, defaults to :class:`BakerConfig`

    Returns:
        list[Placement]: One placement per icon, in input order
    """
    config = config or BakerConfig()
    if len(icons) <= config.native_limit:
        step = config.native_step
    else:
        edge, step = calc_size(
            len(icons),
            row.adjustment,
            base_width=config.base_width,
            scale_numerator=config.scale_numerator,
            scale_denominator=config.scale_denominator,
        )
        icons = [resize_image(icon, edge, edge) for icon in icons]
        logger.debug(f"Row of {len(icons)} icons resized to {edge}x{edge}")

    y = row.y if row.y is not None else config.split_row
    placements = []
    x = row.start_x
    for icon in icons:
        placements.append(Placement(icon, x, y))
        x += step
    return placements


class Compositor:
    """
    Builds the final canvas from decoded assets.

    Example:
        >>> compositor = Compositor()
        >>> canvas, top, bottom = compositor.compose(assets)
    """

    def __init__(self, config: Optional[BakerConfig] = None):
        self.config = config or BakerConfig()

    def plan(
        self, assets: LoadedAssets
    ) -> Tuple[list[Placement], list[Placement]]:
        """Compute the placements of both icon rows without drawing."""
        top = layout_row(assets.top_icons, self.config.top_row, self.config)
        bottom = layout_row(assets.bottom_icons, self.config.bottom_row, self.config)
        return top, bottom

    def compose(
        self, assets: LoadedAssets
    ) -> Tuple[Canvas, list[Placement], list[Placement]]:
        """
        Paint all layers in their fixed order.

        The canvas takes the decoded background size, not the size declared in
        the configuration.

        Returns:
            Tuple[Canvas, list[Placement], list[Placement]]: The painted canvas
            and the placements of the top and bottom rows
        """
        background = assets.background
        canvas = Canvas(background.width, background.height)
        canvas.blit(background, (0, 0), BlendMode.REPLACE)
        canvas.blit(assets.primary, (0, 0), BlendMode.OVER)
        canvas.blit(assets.secondary, (0, self.config.split_row), BlendMode.OVER)

        top, bottom = self.plan(assets)
        for placement in top + bottom:
            canvas.blit(placement.image, placement.position, BlendMode.OVER)
            logger.debug(
                f"Placed {placement.image.source} at {placement.position} "
                f"({placement.image.width}x{placement.image.height})"
            )

        logger.info(
            f"Composed {canvas.width}x{canvas.height} canvas with "
            f"{len(top)} top and {len(bottom)} bottom icons"
        )
        return canvas, top, bottom
