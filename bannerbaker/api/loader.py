"""
Asset Loader

Decodes every image referenced by a request, failing on the first error.
"""

from typing import Sequence

from bannerbaker import logger
from bannerbaker.core.configs import CompositionRequest, IconSpec
from bannerbaker.core.defs import LoadedAssets, RasterImage
from bannerbaker.utils.image import decode_image


class AssetLoader:
    """
    Opens the background, the two base images and both icon lists.

    Example:
        >>> assets = AssetLoader().load(request)
        >>> assets.common
        [RasterImage(...), RasterImage(...), RasterImage(...)]
    """

    def load(self, request: CompositionRequest) -> LoadedAssets:
        """
        Decode all assets of a request, keeping list order.

        Raises:
            ImageIOError: If a file is missing or unreadable.
            DecodeError: If a file is not a decodable image.
        """
        background = decode_image(request.background.file, request.background.name)
        primary = decode_image(
            request.primary_overlay.file, request.primary_overlay.name
        )
        secondary = decode_image(
            request.secondary_overlay.file, request.secondary_overlay.name
        )

        assets = LoadedAssets(
            background=background,
            primary=primary,
            secondary=secondary,
            top_icons=self.load_icons(request.top_icons),
            bottom_icons=self.load_icons(request.bottom_icons),
        )
        logger.info(
            f"Loaded {len(assets.common)} base images, "
            f"{len(assets.top_icons)} top icons and "
            f"{len(assets.bottom_icons)} bottom icons"
        )
        return assets

    def load_icons(self, icons: Sequence[IconSpec]) -> list[RasterImage]:
        return [decode_image(icon.file, icon.name) for icon in icons]
