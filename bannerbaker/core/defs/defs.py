from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import numpy as np


RGBA = Tuple[int, int, int, int]


class PipelineStage(str, Enum):
    CONFIG = "config"
    BACKGROUND = "background"
    LOAD = "load"
    COMPOSE = "compose"
    ENCODE = "encode"


class OutputFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        """
        Resolve a format tag from the configuration.

        Raises:
            UnsupportedFormatError: If the tag is not png, jpg or jpeg.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedFormatError(
                f"Unsupported output format {value!r}, "
                f"expected one of {', '.join(f.value for f in cls)}"
            ) from None


class BannerBakerError(Exception):
    """Base class for every failure raised by the baking pipeline."""

    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        super().__init__(message)
        self.stage = stage


class ConfigError(BannerBakerError):
    pass


class ImageIOError(BannerBakerError, OSError):
    pass


class DecodeError(BannerBakerError):
    pass


class UnsupportedFormatError(BannerBakerError):
    pass


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Decoded RGBA bitmap. The pixel buffer is copied and made read-only.

    Attributes:
        pixels: uint8 array of shape (height, width, 4) in RGBA order
        source: File the image was decoded from
        label: Optional name from the configuration
    """

    pixels: np.ndarray
    source: Path = field(default_factory=lambda: Path("Runtime"))
    label: Optional[str] = None

    def __post_init__(self):
        pixels = np.array(self.pixels, dtype=np.uint8, copy=True)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(
                f"RasterImage expects (height, width, 4) pixels, got {pixels.shape}"
            )
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def __repr__(self):
        return f"RasterImage(source='{self.source}', size={self.size})"


@dataclass
class Placement:
    image: RasterImage
    x: int
    y: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class LoadedAssets:
    background: RasterImage
    primary: RasterImage
    secondary: RasterImage
    top_icons: list[RasterImage] = field(default_factory=list)
    bottom_icons: list[RasterImage] = field(default_factory=list)

    @property
    def common(self) -> list[RasterImage]:
        # background, primary overlay, secondary overlay
        return [self.background, self.primary, self.secondary]


@dataclass
class BakingResult:
    output_path: Path
    output_format: OutputFormat
    size: Tuple[int, int]
    top_placements: list[Placement] = field(default_factory=list)
    bottom_placements: list[Placement] = field(default_factory=list)
    background_path: Optional[Path] = None
