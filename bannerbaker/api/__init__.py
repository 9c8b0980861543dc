"""
BannerBaker API Module

This module provides programmatic access to the banner pipeline
for use as a Python library.
"""

from .background import render_background, save_background
from .baker import BannerBaker
from .compositor import Compositor, calc_size, layout_row
from .loader import AssetLoader

__all__ = [
    "BannerBaker",
    "AssetLoader",
    "Compositor",
    "calc_size",
    "layout_row",
    "render_background",
    "save_background",
]
