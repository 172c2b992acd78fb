"""
Pixel inspection helpers for Pixel Lab.

Read-only views over a PixelBuffer used by presentation layers: per-pixel
records, coordinate lookup, the top-left pixel matrix and pointer-to-pixel
mapping for scaled displays.

Classes:
    PixelRecord: A single pixel with its coordinate
    MatrixCell: One cell of the pixel matrix view
    CoordinateSearchResult: Outcome of a coordinate search in the matrix

Functions:
    read_pixels: List every pixel in row-major order
    pixel_at: Look up one pixel by coordinate
    is_light: Whether a color needs dark text on top of it
    pixel_matrix: Build the top-left matrix view
    search_coordinate: Locate a coordinate in the matrix view
    display_to_pixel: Map a pointer position on a scaled display to a pixel
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PL_Libs.constants import (
    DEFAULT_MATRIX_SIZE,
    LIGHT_BACKGROUND_THRESHOLD,
    SEARCH_FOUND,
    SEARCH_NOT_VISIBLE,
    SEARCH_OUT_OF_RANGE,
)
from PL_Libs.PixelEngineLib.pixel_models import InvalidParameterError, PixelBuffer
from PL_Libs.PixelEngineLib.pixel_ops import luminance


@dataclass(frozen=True)
class PixelRecord:
    x: int
    y: int
    r: int
    g: int
    b: int
    a: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def label(self) -> str:
        return f"x({self.x}),y({self.y}) RGB({self.r},{self.g},{self.b})"


@dataclass(frozen=True)
class MatrixCell:
    x: int
    y: int
    r: int
    g: int
    b: int
    light: bool

    def text(self) -> str:
        return f"{self.r},{self.g},{self.b}"


@dataclass(frozen=True)
class CoordinateSearchResult:
    """
    Outcome of search_coordinate().

    Attributes:
        status: 'found', 'out_of_range' or 'not_visible'
        message: Human-readable summary
        cell: The matching cell when status is 'found'
    """
    status: str
    message: str
    cell: Optional[MatrixCell] = None

    @property
    def found(self) -> bool:
        return self.status == SEARCH_FOUND


def read_pixels(buffer: PixelBuffer) -> List[PixelRecord]:
    records = []
    for index, (r, g, b, a) in enumerate(buffer.iter_pixels()):
        y, x = divmod(index, buffer.width)
        records.append(PixelRecord(x, y, r, g, b, a))
    return records


def pixel_at(buffer: PixelBuffer, x: int, y: int) -> PixelRecord:
    """
    Look up a single pixel.

    Raises:
        InvalidParameterError: If (x, y) lies outside the image
    """
    if not (0 <= x < buffer.width and 0 <= y < buffer.height):
        raise InvalidParameterError(
            f"Coordinate out of range (0-{buffer.width - 1}, 0-{buffer.height - 1})"
        )
    r, g, b, a = buffer.get_pixel(x, y)
    return PixelRecord(x, y, r, g, b, a)


def is_light(r: int, g: int, b: int) -> bool:
    return luminance(r, g, b) > LIGHT_BACKGROUND_THRESHOLD


def pixel_matrix(buffer: PixelBuffer, max_size: int = DEFAULT_MATRIX_SIZE) -> List[List[MatrixCell]]:
    """
    Build the matrix view of the top-left corner of an image.

    Args:
        buffer: Image to inspect
        max_size: Maximum number of rows and columns

    Returns:
        Rows of MatrixCell, at most max_size x max_size
    """
    width = min(max_size, buffer.width)
    height = min(max_size, buffer.height)

    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            r, g, b, _ = buffer.get_pixel(x, y)
            row.append(MatrixCell(x, y, r, g, b, is_light(r, g, b)))
        rows.append(row)
    return rows


def search_coordinate(
    buffer: PixelBuffer,
    x: int,
    y: int,
    max_size: int = DEFAULT_MATRIX_SIZE,
) -> CoordinateSearchResult:
    """
    Locate a coordinate in the matrix view.

    Coordinates outside the image report 'out_of_range'; coordinates inside
    the image but beyond the matrix window report 'not_visible'.
    """
    if not (0 <= x < buffer.width and 0 <= y < buffer.height):
        return CoordinateSearchResult(
            SEARCH_OUT_OF_RANGE,
            f"Coordinate out of range (0-{buffer.width - 1}, 0-{buffer.height - 1})",
        )

    if x >= max_size or y >= max_size:
        return CoordinateSearchResult(
            SEARCH_NOT_VISIBLE,
            f"Coordinate ({x}, {y}) is not visible in the {max_size}x{max_size} matrix",
        )

    r, g, b, _ = buffer.get_pixel(x, y)
    cell = MatrixCell(x, y, r, g, b, is_light(r, g, b))
    return CoordinateSearchResult(SEARCH_FOUND, f"Found RGB({r}, {g}, {b})", cell)


def display_to_pixel(
    buffer: PixelBuffer,
    display_width: float,
    display_height: float,
    offset_x: float,
    offset_y: float,
) -> Optional[Tuple[int, int]]:
    """
    Map a pointer offset on a scaled display of the image to a pixel.

    Args:
        buffer: Displayed image
        display_width: On-screen width of the image
        display_height: On-screen height of the image
        offset_x: Pointer offset from the left edge of the display
        offset_y: Pointer offset from the top edge of the display

    Returns:
        (x, y) pixel coordinate, or None when the pointer is outside the image

    Raises:
        InvalidParameterError: If the display size is not positive
    """
    if display_width <= 0 or display_height <= 0:
        raise InvalidParameterError(
            f"Display size must be positive, got {display_width}x{display_height}"
        )

    x = math.floor(offset_x * buffer.width / display_width)
    y = math.floor(offset_y * buffer.height / display_height)
    if 0 <= x < buffer.width and 0 <= y < buffer.height:
        return x, y
    return None
