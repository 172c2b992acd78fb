"""
Color-domain pixel operations for Pixel Lab.

Every operation takes an immutable PixelBuffer, allocates a fresh output
buffer and leaves alpha untouched. Results are routed through clamp() except
for the bitwise operations, whose results are always valid channel values.

Functions:
    clamp: Round half-up and clip a value to [0, 255]
    luminance: Weighted RGB sum approximating perceived brightness
    to_grayscale: Replace RGB with rounded luminance
    to_binary: Threshold luminance to black or white
    adjust_brightness: Add a delta to every RGB channel
    arithmetic_constant: Add, subtract or multiply RGB by a scalar
    arithmetic_image: Combine two equally sized buffers channel by channel
    boolean_op: Bitwise AND/OR/XOR of two equally sized buffers
"""

import math
import operator
from typing import Callable, Dict

from PL_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    CHANNELS_PER_PIXEL,
    DEFAULT_BINARY_THRESHOLD,
    LUMA_BLUE,
    LUMA_GREEN,
    LUMA_RED,
)
from PL_Libs.PixelEngineLib.pixel_models import (
    ArithmeticOp,
    BooleanOp,
    DimensionMismatchError,
    InvalidParameterError,
    PixelBuffer,
)

_CONSTANT_OPERATIONS: Dict[ArithmeticOp, Callable[[int, float], float]] = {
    ArithmeticOp.ADD: lambda c, k: c + k,
    ArithmeticOp.SUBTRACT: lambda c, k: c - k,
    ArithmeticOp.MULTIPLY: lambda c, k: c * k,
}

# Multiplying two 8-bit channels is normalized back into range by /255.
_IMAGE_OPERATIONS: Dict[ArithmeticOp, Callable[[int, int], float]] = {
    ArithmeticOp.ADD: lambda c1, c2: c1 + c2,
    ArithmeticOp.SUBTRACT: lambda c1, c2: c1 - c2,
    ArithmeticOp.MULTIPLY: lambda c1, c2: (c1 * c2) / 255,
}

_BOOLEAN_OPERATIONS: Dict[BooleanOp, Callable[[int, int], int]] = {
    BooleanOp.AND: operator.and_,
    BooleanOp.OR: operator.or_,
    BooleanOp.XOR: operator.xor,
}


def clamp(value: float) -> int:
    """
    Round a value half-up and clip it to the channel range.

    Args:
        value: Any real number

    Returns:
        Integer in [0, 255]

    Raises:
        InvalidParameterError: If value is NaN
    """
    if math.isnan(value):
        raise InvalidParameterError("Cannot clamp NaN to a channel value")
    if value <= CHANNEL_MIN:
        return CHANNEL_MIN
    if value >= CHANNEL_MAX:
        return CHANNEL_MAX
    return min(CHANNEL_MAX, math.floor(value + 0.5))


def luminance(r: int, g: int, b: int) -> float:
    return LUMA_RED * r + LUMA_GREEN * g + LUMA_BLUE * b


def _apply_rgb_table(src: PixelBuffer, table: bytes) -> PixelBuffer:
    """Map R, G and B through a 256-entry lookup table, keeping alpha."""
    out = bytearray(src.channels.translate(table))
    out[3::CHANNELS_PER_PIXEL] = src.channels[3::CHANNELS_PER_PIXEL]
    return PixelBuffer(src.width, src.height, bytes(out))


def _require_same_size(a: PixelBuffer, b: PixelBuffer, operation: str) -> None:
    if not a.same_size_as(b):
        raise DimensionMismatchError(
            f"{operation} requires images of equal size: "
            f"{a.width}x{a.height} vs {b.width}x{b.height}"
        )


def to_grayscale(src: PixelBuffer) -> PixelBuffer:
    """
    Convert an image to grayscale using the luminance formula.

    Args:
        src: Source buffer

    Returns:
        New buffer with R = G = B = round(0.299R + 0.587G + 0.114B)
    """
    out = bytearray(src.channels)
    for i in range(0, len(out), CHANNELS_PER_PIXEL):
        gray = clamp(luminance(out[i], out[i + 1], out[i + 2]))
        out[i] = out[i + 1] = out[i + 2] = gray
    return PixelBuffer(src.width, src.height, bytes(out))


def to_binary(src: PixelBuffer, threshold: float = DEFAULT_BINARY_THRESHOLD) -> PixelBuffer:
    """
    Convert an image to black and white.

    The rounded luminance of each pixel is compared against the threshold.
    Thresholds outside [0, 255] are accepted and saturate the result.

    Args:
        src: Source buffer
        threshold: Pixels with luminance >= threshold become white

    Returns:
        New buffer whose RGB channels are all 0 or 255
    """
    out = bytearray(src.channels)
    for i in range(0, len(out), CHANNELS_PER_PIXEL):
        gray = clamp(luminance(out[i], out[i + 1], out[i + 2]))
        binary = CHANNEL_MAX if gray >= threshold else CHANNEL_MIN
        out[i] = out[i + 1] = out[i + 2] = binary
    return PixelBuffer(src.width, src.height, bytes(out))


def adjust_brightness(src: PixelBuffer, delta: float) -> PixelBuffer:
    """
    Shift the brightness of every pixel.

    The delta itself is not range checked; only the resulting channels are
    clamped.
    """
    table = bytes(clamp(c + delta) for c in range(256))
    return _apply_rgb_table(src, table)


def arithmetic_constant(src: PixelBuffer, op, k: float) -> PixelBuffer:
    """
    Apply a scalar arithmetic operation to the RGB channels.

    Args:
        src: Source buffer
        op: ArithmeticOp or its tag ('add', 'subtract', 'multiply')
        k: Scalar operand

    Returns:
        New buffer with clamp(c op k) for each RGB channel

    Raises:
        InvalidParameterError: If op is unknown or a result is NaN
    """
    operation = _CONSTANT_OPERATIONS[ArithmeticOp.coerce(op)]
    table = bytes(clamp(operation(c, k)) for c in range(256))
    return _apply_rgb_table(src, table)


def arithmetic_image(a: PixelBuffer, b: PixelBuffer, op) -> PixelBuffer:
    """
    Combine two images channel by channel.

    Multiplication is normalized by 255 so the product of two 8-bit values
    stays in range. Alpha is taken from the first image.

    Args:
        a: Primary buffer
        b: Secondary buffer, same width and height as a
        op: ArithmeticOp or its tag ('add', 'subtract', 'multiply')

    Returns:
        New buffer with the combined channels

    Raises:
        InvalidParameterError: If op is unknown
        DimensionMismatchError: If the buffers differ in size
    """
    operation = _IMAGE_OPERATIONS[ArithmeticOp.coerce(op)]
    _require_same_size(a, b, "Arithmetic operation")

    out = bytearray(a.channels)
    other = b.channels
    for i in range(0, len(out), CHANNELS_PER_PIXEL):
        out[i] = clamp(operation(out[i], other[i]))
        out[i + 1] = clamp(operation(out[i + 1], other[i + 1]))
        out[i + 2] = clamp(operation(out[i + 2], other[i + 2]))
    return PixelBuffer(a.width, a.height, bytes(out))


def boolean_op(a: PixelBuffer, b: PixelBuffer, op) -> PixelBuffer:
    """
    Bitwise combination of two images.

    Args:
        a: Primary buffer
        b: Secondary buffer, same width and height as a
        op: BooleanOp or its tag ('and', 'or', 'xor')

    Returns:
        New buffer with the bitwise result on RGB and alpha from a

    Raises:
        InvalidParameterError: If op is unknown
        DimensionMismatchError: If the buffers differ in size
    """
    operation = _BOOLEAN_OPERATIONS[BooleanOp.coerce(op)]
    _require_same_size(a, b, "Boolean operation")

    out = bytearray(a.channels)
    other = b.channels
    for i in range(0, len(out), CHANNELS_PER_PIXEL):
        out[i] = operation(out[i], other[i])
        out[i + 1] = operation(out[i + 1], other[i + 1])
        out[i + 2] = operation(out[i + 2], other[i + 2])
    return PixelBuffer(a.width, a.height, bytes(out))
