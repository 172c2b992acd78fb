"""
Bridges between PixelBuffer and decoded image containers.

The pixel engine works on raw RGBA buffers only. This module is the caller
side: it turns Pillow images and NumPy arrays into PixelBuffers and back,
resizes a second image to match a primary one, and loads/saves files.

Functions:
    buffer_from_image: Convert a Pillow image to a PixelBuffer
    buffer_to_image: Convert a PixelBuffer to a Pillow RGBA image
    buffer_from_array: Convert an HxW, HxWx3 or HxWx4 uint8 array
    buffer_to_array: Convert a PixelBuffer to an HxWx4 uint8 array
    resize_to_match: Bilinear resize to a target size
    load_buffer: Decode an image file into a PixelBuffer
    save_buffer: Encode a PixelBuffer to an image file
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from PL_Libs.constants import BUFFER_MODE, CHANNEL_MAX, DEFAULT_OUTPUT_FORMAT
from PL_Libs.pillow_compat import BILINEAR, Image
from PL_Libs.PixelEngineLib.pixel_models import InvalidParameterError, PixelBuffer

logger = logging.getLogger(__name__)

# Formats without an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}

# Common aliases Pillow does not register as format names
_FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}


def buffer_from_image(image: Any) -> PixelBuffer:
    """
    Convert a Pillow image to a PixelBuffer.

    Images in any other mode are converted to RGBA first.

    Raises:
        TypeError: If image is not a Pillow image
    """
    if not hasattr(image, "mode") or not hasattr(image, "tobytes"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if image.mode != BUFFER_MODE:
        image = image.convert(BUFFER_MODE)

    width, height = image.size
    return PixelBuffer(width, height, image.tobytes())


def buffer_to_image(buffer: PixelBuffer) -> Any:
    """Convert a PixelBuffer to a new Pillow RGBA image."""
    return Image.frombytes(BUFFER_MODE, buffer.size, buffer.channels)


def buffer_from_array(array: Any) -> PixelBuffer:
    """
    Convert a NumPy array to a PixelBuffer.

    Accepted shapes are (H, W) grayscale, (H, W, 3) RGB and (H, W, 4) RGBA.
    Grayscale and RGB input get an opaque alpha channel.

    Raises:
        InvalidParameterError: If the shape or value range is unsupported
    """
    pixels = np.asarray(array)

    if not np.issubdtype(pixels.dtype, np.integer):
        raise InvalidParameterError(f"Expected integer pixel array, got dtype {pixels.dtype}")
    if pixels.size and (pixels.min() < 0 or pixels.max() > CHANNEL_MAX):
        raise InvalidParameterError("Pixel array values must lie in [0, 255]")
    pixels = pixels.astype(np.uint8)

    if pixels.ndim == 2:
        pixels = np.stack([pixels, pixels, pixels], axis=-1)

    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise InvalidParameterError(f"Unsupported pixel array shape: {pixels.shape}")

    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), CHANNEL_MAX, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=-1)

    height, width = pixels.shape[:2]
    return PixelBuffer(width, height, np.ascontiguousarray(pixels).tobytes())


def buffer_to_array(buffer: PixelBuffer) -> np.ndarray:
    """Convert a PixelBuffer to a writable (H, W, 4) uint8 array."""
    flat = np.frombuffer(buffer.channels, dtype=np.uint8)
    return flat.reshape(buffer.height, buffer.width, 4).copy()


def resize_to_match(buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """
    Resize a buffer with bilinear interpolation.

    Args:
        buffer: Buffer to resize
        width: Target width in pixels
        height: Target height in pixels

    Returns:
        The input buffer when it already has the target size, otherwise a
        resized copy

    Raises:
        InvalidParameterError: If the target size is not positive
    """
    if buffer.width == width and buffer.height == height:
        return buffer

    if width <= 0 or height <= 0:
        raise InvalidParameterError(f"Target size must be positive, got {width}x{height}")

    logger.debug(f"Resizing {buffer.width}x{buffer.height} to {width}x{height}")
    resized = buffer_to_image(buffer).resize((width, height), BILINEAR)
    return buffer_from_image(resized)


def load_buffer(path: Union[str, Path]) -> PixelBuffer:
    """
    Decode an image file into a PixelBuffer.

    Raises:
        OSError: If the file cannot be opened or decoded
    """
    with Image.open(path) as image:
        image.load()
        return buffer_from_image(image)


def save_buffer(
    buffer: PixelBuffer,
    path: Union[str, Path],
    image_format: Optional[str] = DEFAULT_OUTPUT_FORMAT,
) -> Path:
    """
    Encode a PixelBuffer to disk.

    Args:
        buffer: Image to save
        path: Destination file path
        image_format: Pillow format name (default PNG); None infers it from
            the file extension

    Returns:
        The destination path

    Raises:
        OSError: If the parent directory does not exist or the file cannot be written
        ValueError: If Pillow has no writer for the format
    """
    save_path = Path(path)
    if not save_path.parent.is_dir():
        raise OSError(f"Output directory does not exist: {save_path.parent}")

    if image_format is not None:
        image_format = image_format.upper()
        image_format = _FORMAT_ALIASES.get(image_format, image_format)

    image = buffer_to_image(buffer)
    target_format = image_format or save_path.suffix.lstrip(".").upper()
    if _FORMAT_ALIASES.get(target_format, target_format) in _OPAQUE_FORMATS:
        image = image.convert("RGB")

    try:
        image.save(save_path, format=image_format)
    except KeyError as e:
        raise ValueError(f"Unsupported image format: {image_format}") from e
    logger.debug(f"Saved {buffer.width}x{buffer.height} image to {save_path}")
    return save_path
