import json
from pathlib import Path
from typing import Annotated, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from bannerbaker.core.defs import ConfigError
from bannerbaker import logger


Channel = Annotated[int, Field(ge=0, le=255)]
Color = Tuple[Channel, Channel, Channel, Channel]


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ImageSpec(RequestModel):
    # width and height are informational, the decoded image decides
    name: Optional[str] = None
    file: str = Field(min_length=1)
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)


class IconSpec(RequestModel):
    name: Optional[str] = None
    file: str = Field(min_length=1)


class BackgroundColors(RequestModel):
    top: Color
    bottom: Color


class OutputSpec(RequestModel):
    file: str = Field(min_length=1)
    format: str


class CompositionRequest(RequestModel):
    """
    Everything a single bake needs, as read from the JSON configuration.

    JSON keys keep their camelCase names through aliases, e.g. ``bgRgba`` is
    available as ``background_colors``.
    """

    background: ImageSpec
    background_colors: BackgroundColors = Field(alias="bgRgba")
    primary_overlay: ImageSpec = Field(alias="like")
    secondary_overlay: ImageSpec = Field(alias="dislike")
    output: OutputSpec
    top_icons: List[IconSpec] = Field(default_factory=list, alias="likeIcon")
    bottom_icons: List[IconSpec] = Field(default_factory=list, alias="dislikeIcon")

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "CompositionRequest":
        """
        Parse a JSON document into a request.

        Raises:
            ConfigError: If the document is empty, not JSON, or has the wrong shape.
        """
        if not text or not text.strip():
            raise ConfigError("Configuration document is empty")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Configuration is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Configuration has an invalid shape: {e}") from e


def load_request(path: Union[str, Path]) -> CompositionRequest:
    """
    Read and parse a configuration file.

    Args:
        path: Path to the JSON configuration

    Returns:
        CompositionRequest: The decoded request.
    """
    path = Path(path)
    if not str(path) or path == Path("."):
        raise ConfigError("No configuration file given")
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e

    request = CompositionRequest.from_json(text)
    logger.info(
        f"Loaded configuration {path}: {len(request.top_icons)} top icons, "
        f"{len(request.bottom_icons)} bottom icons"
    )
    return request


class RowConfig(BaseModel):
    start_x: int
    # None follows BakerConfig.split_row
    y: Optional[int] = None
    adjustment: int = 0


class BakerConfig(BaseModel):
    # first row of the bottom band, shared by the renderer and the compositor
    split_row: int = 198
    # rows up to this many icons keep native size
    native_limit: int = 4
    native_step: int = 230
    base_width: int = 1064
    # shrunk icon edge = step * scale_numerator / scale_denominator
    scale_numerator: int = 100
    scale_denominator: int = 115
    jpeg_quality: int = Field(default=100, ge=0, le=100)

    top_row: RowConfig = Field(
        default_factory=lambda: RowConfig(start_x=520, y=0, adjustment=0)
    )
    bottom_row: RowConfig = Field(
        default_factory=lambda: RowConfig(start_x=550, adjustment=-30)
    )

    @model_validator(mode="after")
    def align_bottom_row(self) -> "BakerConfig":
        # the bottom icons sit on the band split, like the secondary overlay
        if self.bottom_row.y is None:
            self.bottom_row = self.bottom_row.model_copy(update={"y": self.split_row})
        elif self.bottom_row.y != self.split_row:
            raise ValueError(
                f"bottom_row.y ({self.bottom_row.y}) must equal split_row ({self.split_row})"
            )
        return self
