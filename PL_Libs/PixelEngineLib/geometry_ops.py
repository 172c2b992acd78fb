"""
Geometric transformations for pixel buffers.

Each transform relocates every source pixel to exactly one destination and
copies all four channel bytes, alpha included. Rotations are clockwise.

Buffers are viewed as HxWx4 NumPy arrays without copying; only the final
contiguous result is materialized.
"""

from typing import Callable, Dict

import numpy as np

from PL_Libs.constants import CHANNELS_PER_PIXEL
from PL_Libs.PixelEngineLib.pixel_models import FlipDirection, PixelBuffer, RotationAngle


def _as_grid(src: PixelBuffer) -> np.ndarray:
    flat = np.frombuffer(src.channels, dtype=np.uint8)
    return flat.reshape(src.height, src.width, CHANNELS_PER_PIXEL)


def _from_grid(grid: np.ndarray) -> PixelBuffer:
    height, width = grid.shape[:2]
    return PixelBuffer(width, height, np.ascontiguousarray(grid).tobytes())


def rotate90(src: PixelBuffer) -> PixelBuffer:
    """Rotate 90° clockwise: (x, y) -> (height - 1 - y, x)."""
    return _from_grid(np.rot90(_as_grid(src), k=-1))


def rotate180(src: PixelBuffer) -> PixelBuffer:
    """Rotate 180°: (x, y) -> (width - 1 - x, height - 1 - y)."""
    return _from_grid(np.rot90(_as_grid(src), k=2))


def rotate270(src: PixelBuffer) -> PixelBuffer:
    """Rotate 270° clockwise (90° counter-clockwise): (x, y) -> (y, width - 1 - x)."""
    return _from_grid(np.rot90(_as_grid(src), k=1))


def flip_horizontal(src: PixelBuffer) -> PixelBuffer:
    """Mirror horizontally (flip left-right)."""
    return _from_grid(_as_grid(src)[:, ::-1])


def flip_vertical(src: PixelBuffer) -> PixelBuffer:
    """Mirror vertically (flip top-bottom)."""
    return _from_grid(_as_grid(src)[::-1])


_ROTATIONS: Dict[RotationAngle, Callable[[PixelBuffer], PixelBuffer]] = {
    RotationAngle.CW_90: rotate90,
    RotationAngle.CW_180: rotate180,
    RotationAngle.CW_270: rotate270,
}

_FLIPS: Dict[FlipDirection, Callable[[PixelBuffer], PixelBuffer]] = {
    FlipDirection.HORIZONTAL: flip_horizontal,
    FlipDirection.VERTICAL: flip_vertical,
}


def rotate(src: PixelBuffer, degrees) -> PixelBuffer:
    """
    Rotate clockwise by 90, 180 or 270 degrees.

    Args:
        src: Source buffer
        degrees: RotationAngle or one of 90, 180, 270 (int or string)

    Raises:
        InvalidParameterError: If degrees is not a supported angle
    """
    return _ROTATIONS[RotationAngle.coerce(degrees)](src)


def flip(src: PixelBuffer, direction) -> PixelBuffer:
    """
    Mirror along an axis.

    Args:
        src: Source buffer
        direction: FlipDirection or 'horizontal' / 'vertical'

    Raises:
        InvalidParameterError: If direction is unknown
    """
    return _FLIPS[FlipDirection.coerce(direction)](src)
