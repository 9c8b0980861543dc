"""
BannerBaker Core API

Runs the whole pipeline: background, asset loading, composition, encoding.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from bannerbaker import logger
from bannerbaker.api.background import render_background, save_background
from bannerbaker.api.compositor import Compositor
from bannerbaker.api.loader import AssetLoader
from bannerbaker.core.configs import BakerConfig, CompositionRequest, load_request
from bannerbaker.core.defs import (
    BakingResult,
    BannerBakerError,
    LoadedAssets,
    OutputFormat,
    PipelineStage,
)
from bannerbaker.utils.image import save_image


@contextmanager
def stage(name: PipelineStage):
    """Tag any pipeline error raised inside the block with its stage."""
    try:
        yield
    except BannerBakerError as e:
        if e.stage is None:
            e.stage = name
        logger.error(f"Stage '{name.value}' failed: {e}")
        raise


class BannerBaker:
    """
    Main BannerBaker class composing a banner from a request.

    Example:
        >>> from bannerbaker.api import BannerBaker
        >>> baker = BannerBaker()
        >>> result = baker.bake_file("jsons/preference.json")
        >>> result.output_path
        PosixPath('images/saved.png')
    """

    def __init__(self, config: Optional[BakerConfig] = None):
        """
        Initialize BannerBaker.

        Args:
            config: Optional BakerConfig for customizing the layout constants
        """
        self.config = config or BakerConfig()
        self.loader = AssetLoader()
        self.compositor = Compositor(self.config)

    def bake_file(
        self, config_path: Union[str, Path], render_background: bool = True
    ) -> BakingResult:
        """Load a JSON configuration and run the pipeline on it."""
        with stage(PipelineStage.CONFIG):
            request = load_request(config_path)
        return self.run(request, render_background=render_background)

    def render_background(self, request: CompositionRequest) -> Path:
        """Paint the two-band background and write it to ``background.file``."""
        spec = request.background
        with stage(PipelineStage.BACKGROUND):
            canvas = render_background(
                spec.width,
                spec.height,
                request.background_colors.top,
                request.background_colors.bottom,
                split_row=self.config.split_row,
            )
            path = save_background(canvas, spec.file)
        logger.info(f"Background {spec.width}x{spec.height} written to {path}")
        return path

    def load(self, request: CompositionRequest) -> LoadedAssets:
        with stage(PipelineStage.LOAD):
            return self.loader.load(request)

    def run(
        self, request: CompositionRequest, render_background: bool = True
    ) -> BakingResult:
        """
        Bake a request into its output file.

        Args:
            request: The decoded configuration
            render_background: Whether to paint ``background.file`` first; when
                False the existing file is used as the background

        Returns:
            BakingResult describing the written file

        Raises:
            BannerBakerError: Tagged with the failing stage. Nothing is written
                to ``output.file`` unless every stage before encoding succeeded.
        """
        background_path = None
        if render_background:
            background_path = self.render_background(request)

        assets = self.load(request)

        with stage(PipelineStage.ENCODE):
            # reject unknown formats before spending time on composition
            output_format = OutputFormat.parse(request.output.format)

        with stage(PipelineStage.COMPOSE):
            canvas, top, bottom = self.compositor.compose(assets)

        with stage(PipelineStage.ENCODE):
            output_path = save_image(
                canvas.pixels,
                request.output.file,
                output_format,
                quality=self.config.jpeg_quality,
            )

        logger.info(f"Baked {canvas.width}x{canvas.height} image to {output_path}")
        return BakingResult(
            output_path=output_path,
            output_format=output_format,
            size=canvas.size,
            top_placements=top,
            bottom_placements=bottom,
            background_path=background_path,
        )
