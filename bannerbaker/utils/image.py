from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from bannerbaker.core.defs import (
    DecodeError,
    ImageIOError,
    OutputFormat,
    RasterImage,
)
from bannerbaker import logger


def to_rgba(image: np.ndarray) -> np.ndarray:
    """
    Convert an OpenCV decoded array to 8-bit RGBA.

    Args:
        image: Array as returned by ``cv2.imdecode`` with ``IMREAD_UNCHANGED``
            (grayscale, BGR or BGRA; 8 or 16 bit)

    Returns:
        np.ndarray: Array with shape (height, width, 4) in RGBA order
    """
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    raise DecodeError(f"Unsupported channel count {channels}")


def decode_image(
    image_path: Union[str, Path], label: Optional[str] = None
) -> RasterImage:
    """
    Open and decode an image file, sniffing the format from its content.

    Args:
        image_path: Path to the image file
        label: Optional name carried by the decoded image

    Returns:
        RasterImage: The decoded RGBA image

    Raises:
        ImageIOError: If the file cannot be opened or read.
        DecodeError: If the content is not a decodable raster image.
    """
    image_path = Path(image_path)
    try:
        with open(image_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ImageIOError(f"Cannot read image {image_path}: {e}") from e

    buffer = np.frombuffer(data, dtype=np.uint8)
    decoded = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED) if buffer.size else None
    if decoded is None:
        raise DecodeError(f"Failed to decode image: {image_path}")

    image = RasterImage(to_rgba(decoded), source=image_path, label=label)
    logger.debug(f"Decoded {image_path} ({image.width}x{image.height})")
    return image


def resize_image(image: RasterImage, width: int, height: int) -> RasterImage:
    """
    Resample an image with a Lanczos filter.

    Color is premultiplied by alpha while resampling, so transparent pixels do
    not bleed into the edges of the visible shape.
    """
    if image.size == (width, height):
        return image
    pixels = image.pixels.astype(np.float32)
    pixels[..., :3] *= pixels[..., 3:4] / 255.0
    resized = np.clip(
        cv2.resize(pixels, (width, height), interpolation=cv2.INTER_LANCZOS4), 0, 255
    )

    alpha = resized[..., 3:4]
    rgb = np.divide(
        resized[..., :3] * 255.0,
        alpha,
        out=np.zeros_like(resized[..., :3]),
        where=alpha > 0,
    )
    straight = np.concatenate([rgb, alpha], axis=-1)
    return RasterImage(
        np.clip(np.rint(straight), 0, 255).astype(np.uint8),
        source=image.source,
        label=image.label,
    )


def encode_image(
    pixels: np.ndarray, output_format: Union[str, OutputFormat], quality: int = 100
) -> bytes:
    """
    Encode RGBA pixels into PNG or JPEG bytes.

    JPEG has no alpha channel, so the alpha values are dropped.

    Args:
        pixels: Array with shape (height, width, 4) in RGBA order
        output_format: Target format tag
        quality: JPEG quality (0-100), ignored for PNG

    Returns:
        bytes: The encoded file content

    Raises:
        UnsupportedFormatError: If the format tag is not recognized.
        ImageIOError: If OpenCV cannot encode the pixels, e.g. an empty image.
    """
    fmt = OutputFormat.parse(output_format)
    try:
        if fmt is OutputFormat.PNG:
            ok, encoded = cv2.imencode(
                ".png", cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
            )
        else:
            ok, encoded = cv2.imencode(
                ".jpg",
                cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGR),
                [cv2.IMWRITE_JPEG_QUALITY, quality],
            )
    except cv2.error as e:
        raise ImageIOError(f"Failed to encode image as {fmt.value}: {e}") from e
    if not ok:
        raise ImageIOError(f"Failed to encode image as {fmt.value}")
    return encoded.tobytes()


def save_image(
    pixels: np.ndarray,
    output_path: Union[str, Path],
    output_format: Union[str, OutputFormat],
    quality: int = 100,
) -> Path:
    """
    Encode pixels and write them to disk.

    The whole file is encoded in memory first, so an unsupported format or a
    failed encode never creates the output file.

    Returns:
        Path: The written file
    """
    output_path = Path(output_path)
    data = encode_image(pixels, output_format, quality)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ImageIOError(f"Cannot write image {output_path}: {e}") from e
    logger.info(f"Saved {len(data)} bytes to {output_path}")
    return output_path
