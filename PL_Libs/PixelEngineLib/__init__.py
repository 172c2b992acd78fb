"""
PixelEngineLib - Pixel buffer model and transform engine

This module provides the PixelBuffer model, the color-domain and geometry
operations, and read-only inspection helpers for the Pixel Lab project.
Conversion to and from Pillow images lives in
PL_Libs.PixelEngineLib.image_bridge and is not imported here.
"""

from PL_Libs.PixelEngineLib.pixel_models import (
    ArithmeticOp,
    BooleanOp,
    DimensionMismatchError,
    FlipDirection,
    InvalidParameterError,
    MissingInputError,
    PixelBuffer,
    PixelEngineError,
    RgbaColor,
    RotationAngle,
)
from PL_Libs.PixelEngineLib.pixel_ops import (
    clamp,
    luminance,
    to_grayscale,
    to_binary,
    adjust_brightness,
    arithmetic_constant,
    arithmetic_image,
    boolean_op,
)
from PL_Libs.PixelEngineLib.geometry_ops import (
    rotate90,
    rotate180,
    rotate270,
    flip_horizontal,
    flip_vertical,
    rotate,
    flip,
)

__all__ = [
    "ArithmeticOp",
    "BooleanOp",
    "DimensionMismatchError",
    "FlipDirection",
    "InvalidParameterError",
    "MissingInputError",
    "PixelBuffer",
    "PixelEngineError",
    "RgbaColor",
    "RotationAngle",
    "clamp",
    "luminance",
    "to_grayscale",
    "to_binary",
    "adjust_brightness",
    "arithmetic_constant",
    "arithmetic_image",
    "boolean_op",
    "rotate90",
    "rotate180",
    "rotate270",
    "flip_horizontal",
    "flip_vertical",
    "rotate",
    "flip",
]
