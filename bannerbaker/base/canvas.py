from enum import Enum
from typing import Optional, Tuple

import numpy as np

from bannerbaker.core.defs import RGBA, RasterImage


class BlendMode(Enum):
    REPLACE = 0
    OVER = 1


class Canvas:
    """
    Mutable RGBA pixel buffer painted during composition.

    Example:
        >>> canvas = Canvas(800, 400)
        >>> canvas.fill_rect(0, 0, 800, 198, (0, 153, 153, 255))
        >>> canvas.blit(icon, (520, 0), BlendMode.OVER)
    """

    def __init__(self, width: int, height: int, color: RGBA = (0, 0, 0, 0)):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.pixels = np.empty((height, width, 4), dtype=np.uint8)
        self.pixels[:] = color

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def paint(self, x: int, y: int, color: RGBA):
        """Set one pixel. Points outside the canvas are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: RGBA):
        """Fill the half-open rectangle [x0, x1) x [y0, y1), clipped to the canvas."""
        x0, x1 = max(0, x0), min(self.width, x1)
        y0, y1 = max(0, y0), min(self.height, y1)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color

    def _clip(
        self, image: RasterImage, x: int, y: int
    ) -> Optional[Tuple[slice, slice, slice, slice]]:
        dst_x0, dst_y0 = max(0, x), max(0, y)
        dst_x1 = min(self.width, x + image.width)
        dst_y1 = min(self.height, y + image.height)
        if dst_x0 >= dst_x1 or dst_y0 >= dst_y1:
            return None
        src_x0, src_y0 = dst_x0 - x, dst_y0 - y
        return (
            slice(dst_y0, dst_y1),
            slice(dst_x0, dst_x1),
            slice(src_y0, src_y0 + dst_y1 - dst_y0),
            slice(src_x0, src_x0 + dst_x1 - dst_x0),
        )

    def blit(
        self,
        image: RasterImage,
        position: Tuple[int, int] = (0, 0),
        mode: BlendMode = BlendMode.OVER,
    ):
        """
        Draw an image with its top-left corner at ``position``.

        The source rectangle is clipped to the canvas bounds.

        Args:
            image: Source image
            position: Integer (x, y) offset on the canvas
            mode: REPLACE overwrites pixels including alpha, OVER alpha-blends
        """
        region = self._clip(image, int(position[0]), int(position[1]))
        if region is None:
            return
        dst_rows, dst_cols, src_rows, src_cols = region
        src = image.pixels[src_rows, src_cols]

        if mode is BlendMode.REPLACE:
            self.pixels[dst_rows, dst_cols] = src
            return

        dst = self.pixels[dst_rows, dst_cols]
        src_f = src.astype(np.float32) / 255.0
        dst_f = dst.astype(np.float32) / 255.0
        src_a = src_f[..., 3:4]
        dst_a = dst_f[..., 3:4]

        out_a = src_a + dst_a * (1.0 - src_a)
        out_rgb = src_f[..., :3] * src_a + dst_f[..., :3] * dst_a * (1.0 - src_a)
        out_rgb = np.divide(
            out_rgb, out_a, out=np.zeros_like(out_rgb), where=out_a > 0
        )

        blended = np.concatenate([out_rgb, out_a], axis=-1)
        self.pixels[dst_rows, dst_cols] = np.clip(
            np.rint(blended * 255.0), 0, 255
        ).astype(np.uint8)

    def to_image(self) -> RasterImage:
        """Snapshot the canvas as an immutable image."""
        return RasterImage(self.pixels)

    def __repr__(self):
        return f"Canvas(size={self.size})"
