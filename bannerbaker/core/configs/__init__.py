from .configs import (
    BackgroundColors,
    BakerConfig,
    CompositionRequest,
    IconSpec,
    ImageSpec,
    OutputSpec,
    RowConfig,
    load_request,
)

__all__ = [
    "BackgroundColors",
    "BakerConfig",
    "CompositionRequest",
    "IconSpec",
    "ImageSpec",
    "OutputSpec",
    "RowConfig",
    "load_request",
]
