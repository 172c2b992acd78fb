"""
Unit tests for pixel_models module.

Tests the PixelBuffer value object and the operation enums.
"""

import numpy as np
import pytest

from PL_Libs.PixelEngineLib.pixel_models import (
    ArithmeticOp,
    BooleanOp,
    DimensionMismatchError,
    FlipDirection,
    InvalidParameterError,
    MissingInputError,
    PixelBuffer,
    PixelEngineError,
    RotationAngle,
)


class TestPixelBufferConstruction:
    """Tests for PixelBuffer validation."""

    def test_accepts_matching_length(self):
        buffer = PixelBuffer(2, 1, bytes([1, 2, 3, 4, 5, 6, 7, 8]))

        assert buffer.size == (2, 1)
        assert buffer.pixel_count == 2

    def test_converts_list_channels_to_bytes(self):
        buffer = PixelBuffer(1, 1, [10, 20, 30, 40])

        assert isinstance(buffer.channels, bytes)
        assert buffer.channels == bytes([10, 20, 30, 40])

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidParameterError):
            PixelBuffer(2, 2, bytes(12))

    def test_rejects_negative_dimensions(self):
        with pytest.raises(InvalidParameterError):
            PixelBuffer(-1, 2, b"")

    def test_rejects_non_integer_dimensions(self):
        with pytest.raises(InvalidParameterError):
            PixelBuffer(1.5, 2, b"")
        with pytest.raises(InvalidParameterError):
            PixelBuffer(True, 1, bytes(4))

    def test_accepts_numpy_integer_dimensions(self):
        height, width = np.zeros((2, 3)).shape

        buffer = PixelBuffer(np.int64(width), np.uint16(height), bytes(24))

        assert buffer.size == (3, 2)
        assert type(buffer.width) is int
        assert type(buffer.height) is int

    def test_rejects_out_of_range_channel(self):
        with pytest.raises(InvalidParameterError):
            PixelBuffer(1, 1, [0, 0, 300, 255])

    def test_zero_size_buffer(self):
        buffer = PixelBuffer(0, 5, b"")

        assert buffer.pixel_count == 0
        assert list(buffer.iter_pixels()) == []

    def test_is_immutable(self):
        buffer = PixelBuffer.blank(1, 1)

        with pytest.raises(AttributeError):
            buffer.width = 3


class TestPixelBufferHelpers:
    """Tests for PixelBuffer helpers."""

    def test_blank_fills_color(self):
        buffer = PixelBuffer.blank(2, 2, (1, 2, 3, 4))

        assert list(buffer.iter_pixels()) == [(1, 2, 3, 4)] * 4

    def test_from_pixels_row_major(self, color_buffer, sample_rgba_colors):
        assert list(color_buffer.iter_pixels()) == sample_rgba_colors

    def test_from_pixels_rejects_short_pixel(self):
        with pytest.raises(InvalidParameterError):
            PixelBuffer.from_pixels(1, 1, [(1, 2, 3)])

    def test_get_pixel(self, labelled_buffer):
        assert labelled_buffer.get_pixel(0, 0) == (1, 2, 3, 10)
        assert labelled_buffer.get_pixel(2, 0) == (7, 8, 9, 30)
        assert labelled_buffer.get_pixel(1, 1) == (13, 14, 15, 50)

    def test_get_pixel_out_of_range(self, labelled_buffer):
        with pytest.raises(InvalidParameterError):
            labelled_buffer.get_pixel(3, 0)
        with pytest.raises(InvalidParameterError):
            labelled_buffer.get_pixel(0, -1)

    def test_same_size_as(self, labelled_buffer):
        assert labelled_buffer.same_size_as(PixelBuffer.blank(3, 2))
        assert not labelled_buffer.same_size_as(PixelBuffer.blank(2, 3))

    def test_equality_by_value(self):
        assert PixelBuffer.blank(2, 1) == PixelBuffer(2, 1, bytes([0, 0, 0, 255] * 2))


class TestOperationEnums:
    """Tests for tag coercion on the operation enums."""

    def test_coerce_member(self):
        assert ArithmeticOp.coerce(ArithmeticOp.MULTIPLY) is ArithmeticOp.MULTIPLY

    def test_coerce_string_case_insensitive(self):
        assert ArithmeticOp.coerce(" Add ") is ArithmeticOp.ADD
        assert BooleanOp.coerce("XOR") is BooleanOp.XOR
        assert FlipDirection.coerce("vertical") is FlipDirection.VERTICAL

    def test_coerce_rotation_from_int_or_string(self):
        assert RotationAngle.coerce(90) is RotationAngle.CW_90
        assert RotationAngle.coerce("270") is RotationAngle.CW_270

    def test_unknown_tag_raises(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            BooleanOp.coerce("nand")

        assert "and, or, xor" in str(exc_info.value)

    def test_unsupported_angle_raises(self):
        with pytest.raises(InvalidParameterError):
            RotationAngle.coerce(45)


class TestErrorTaxonomy:
    """Tests for the engine error hierarchy."""

    def test_value_errors(self):
        assert issubclass(DimensionMismatchError, PixelEngineError)
        assert issubclass(DimensionMismatchError, ValueError)
        assert issubclass(InvalidParameterError, PixelEngineError)
        assert issubclass(InvalidParameterError, ValueError)

    def test_missing_input_is_engine_error(self):
        assert issubclass(MissingInputError, PixelEngineError)
