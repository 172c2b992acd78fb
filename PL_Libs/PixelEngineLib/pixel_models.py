"""
Pixel engine data models for Pixel Lab.

This module defines the core data structures shared by every pixel operation.

Classes:
    PixelBuffer: Immutable RGBA bitmap (row-major, four bytes per pixel)
    ArithmeticOp: Arithmetic operation selector (add, subtract, multiply)
    BooleanOp: Bitwise operation selector (and, or, xor)
    RotationAngle: Clockwise rotation selector (90, 180, 270)
    FlipDirection: Mirror axis selector (horizontal, vertical)
    PixelEngineError: Base class for engine errors
    DimensionMismatchError: Two-image operation on unequal sizes
    InvalidParameterError: Unknown operation tag or malformed input
    MissingInputError: Operation invoked without a required image

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Sequence, Tuple

from PL_Libs.constants import CHANNELS_PER_PIXEL

RgbaColor = Tuple[int, int, int, int]


class PixelEngineError(Exception):
    """Base class for all pixel engine errors."""


class DimensionMismatchError(PixelEngineError, ValueError):
    """Raised when two buffers that must share dimensions do not."""


class InvalidParameterError(PixelEngineError, ValueError):
    """Raised for unknown operation tags and malformed buffers or parameters."""


class MissingInputError(PixelEngineError):
    """Raised when an operation is run without one of its input images."""


class _TaggedOperation(Enum):
    @classmethod
    def coerce(cls, value: Any):
        """
        Resolve a member from itself or from its tag.

        String tags are matched case-insensitively after stripping whitespace.

        Raises:
            InvalidParameterError: If the value names no member
        """
        if isinstance(value, cls):
            return value
        key = value.strip().lower() if isinstance(value, str) else value
        for member in cls:
            if member.value == key or str(member.value) == key:
                return member
        valid = ", ".join(str(member.value) for member in cls)
        raise InvalidParameterError(
            f"Unknown {cls.__name__} '{value}'. Valid values: {valid}"
        )


class ArithmeticOp(_TaggedOperation):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"


class BooleanOp(_TaggedOperation):
    AND = "and"
    OR = "or"
    XOR = "xor"


class RotationAngle(_TaggedOperation):
    CW_90 = 90
    CW_180 = 180
    CW_270 = 270


class FlipDirection(_TaggedOperation):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class PixelBuffer:
    """
    Decoded RGBA bitmap.

    Pixels are stored row-major with four consecutive channel bytes per pixel
    in the order red, green, blue, alpha. Instances are immutable; every
    operation returns a new buffer.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        channels: Raw channel bytes, length width * height * 4
    """

    width: int
    height: int
    channels: bytes

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            message = f"{name} must be a non-negative integer, got {value!r}"
            if isinstance(value, bool):
                raise InvalidParameterError(message)
            try:
                size = operator.index(value)
            except TypeError as e:
                raise InvalidParameterError(message) from e
            if size < 0:
                raise InvalidParameterError(message)
            object.__setattr__(self, name, size)

        channels = self.channels
        if not isinstance(channels, bytes):
            try:
                channels = bytes(channels)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(f"Invalid channel data: {e}") from e
            object.__setattr__(self, "channels", channels)

        expected = self.width * self.height * CHANNELS_PER_PIXEL
        if len(channels) != expected:
            raise InvalidParameterError(
                f"Channel buffer length {len(channels)} does not match "
                f"{self.width}x{self.height} RGBA ({expected} bytes)"
            )

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 255)) -> "PixelBuffer":
        """Create a buffer filled with a single color."""
        return cls(width, height, bytes(color) * (width * height))

    @classmethod
    def from_pixels(
        cls,
        width: int,
        height: int,
        pixels: Sequence[RgbaColor],
    ) -> "PixelBuffer":
        """
        Create a buffer from a row-major sequence of RGBA tuples.

        Raises:
            InvalidParameterError: If a pixel is not four channel values
        """
        data = bytearray()
        for pixel in pixels:
            if len(pixel) != CHANNELS_PER_PIXEL:
                raise InvalidParameterError(f"Expected RGBA pixel, got {pixel!r}")
            try:
                data.extend(pixel)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(f"Invalid pixel {pixel!r}: {e}") from e
        return cls(width, height, bytes(data))

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def same_size_as(self, other: "PixelBuffer") -> bool:
        return self.width == other.width and self.height == other.height

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        """
        Read the RGBA value at (x, y).

        Raises:
            InvalidParameterError: If the coordinate lies outside the image
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidParameterError(
                f"Coordinate ({x}, {y}) outside {self.width}x{self.height} image"
            )
        index = (y * self.width + x) * CHANNELS_PER_PIXEL
        r, g, b, a = self.channels[index:index + CHANNELS_PER_PIXEL]
        return r, g, b, a

    def iter_pixels(self) -> Iterator[RgbaColor]:
        data = self.channels
        for index in range(0, len(data), CHANNELS_PER_PIXEL):
            yield data[index], data[index + 1], data[index + 2], data[index + 3]
