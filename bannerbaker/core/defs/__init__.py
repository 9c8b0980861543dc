from .defs import (
    RGBA,
    BakingResult,
    BannerBakerError,
    ConfigError,
    DecodeError,
    ImageIOError,
    LoadedAssets,
    OutputFormat,
    PipelineStage,
    Placement,
    RasterImage,
    UnsupportedFormatError,
)

__all__ = [
    "RGBA",
    "BakingResult",
    "BannerBakerError",
    "ConfigError",
    "DecodeError",
    "ImageIOError",
    "LoadedAssets",
    "OutputFormat",
    "PipelineStage",
    "Placement",
    "RasterImage",
    "UnsupportedFormatError",
]
