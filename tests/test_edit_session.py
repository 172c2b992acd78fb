"""
Tests for EditSession.

Tests per-tab results, geometry chaining, second images and error logging.
"""

import logging

import pytest

from PL_Libs.OpsLib.op_executors import OperationExecutorRegistry
from PL_Libs.PixelEngineLib.geometry_ops import flip_horizontal, rotate90, rotate180
from PL_Libs.PixelEngineLib.pixel_models import (
    DimensionMismatchError,
    InvalidParameterError,
    MissingInputError,
    PixelBuffer,
)
from PL_Libs.PixelEngineLib.pixel_ops import adjust_brightness, boolean_op, to_binary, to_grayscale
from PL_Libs.SessionLib.edit_session import EditSession


@pytest.fixture
def session(labelled_buffer):
    return EditSession(labelled_buffer)


class TestColorTabs:
    """Color tabs always work on the original image."""

    def test_result_defaults_to_original(self, session, labelled_buffer):
        assert session.result("grayscale") is labelled_buffer
        assert not session.has_result("grayscale")

    def test_grayscale(self, session, labelled_buffer):
        result = session.apply_grayscale()

        assert result == to_grayscale(labelled_buffer)
        assert session.result("grayscale") is result
        assert session.has_result("grayscale")

    def test_binary_reapplied_from_original(self, session, labelled_buffer):
        session.apply_binary(5)
        result = session.apply_binary(200)

        assert result == to_binary(labelled_buffer, 200)

    def test_color_tab_ignores_geometry(self, session, labelled_buffer):
        session.apply_rotation(90)

        assert session.apply_brightness(50) == adjust_brightness(labelled_buffer, 50)

    def test_brightness_range_enforced(self, session):
        with pytest.raises(InvalidParameterError):
            session.apply_brightness(101)
        with pytest.raises(InvalidParameterError):
            session.apply_brightness(-150)

    def test_arithmetic_constant(self, session):
        result = session.apply_arithmetic("add", 300)

        assert {p[:3] for p in result.iter_pixels()} == {(255, 255, 255)}


class TestGeometryTab:
    """The geometry tab chains on its previous result."""

    def test_rotations_chain(self, session, labelled_buffer):
        session.apply_rotation(90)
        result = session.apply_rotation(90)

        assert result == rotate180(labelled_buffer)

    def test_flip_after_rotation(self, session, labelled_buffer):
        session.apply_rotation("90")
        result = session.apply_flip("horizontal")

        assert result == flip_horizontal(rotate90(labelled_buffer))

    def test_reset_restarts_chain(self, session, labelled_buffer):
        session.apply_rotation(90)

        assert session.reset("geometry") is labelled_buffer
        assert session.apply_rotation(90) == rotate90(labelled_buffer)

    def test_reset_all(self, session, labelled_buffer):
        session.apply_grayscale()
        session.apply_flip("vertical")

        session.reset_all()

        assert not session.has_result("grayscale")
        assert session.result("geometry") is labelled_buffer


class TestSecondImage:
    """Tests for the arithmetic and boolean tabs."""

    def test_missing_second_image(self, session):
        with pytest.raises(MissingInputError):
            session.apply_boolean("and")
        with pytest.raises(MissingInputError):
            session.apply_arithmetic("add")

    def test_needs_resize_flag(self, session, labelled_buffer):
        assert session.set_second_image("boolean", labelled_buffer) is False
        assert session.set_second_image("arithmetic", PixelBuffer.blank(1, 1)) is True

    def test_boolean_with_matching_image(self, session, labelled_buffer, color_buffer):
        session.set_second_image("boolean", color_buffer)

        assert session.apply_boolean("xor") == boolean_op(labelled_buffer, color_buffer, "xor")

    def test_second_image_is_resized(self, session, labelled_buffer):
        session.set_second_image("boolean", PixelBuffer.blank(1, 1, (255, 255, 255, 255)))

        result = session.apply_boolean("and")

        assert result == labelled_buffer
        assert session.second_image("boolean").size == (1, 1)

    def test_arithmetic_image_mode(self, session):
        session.set_second_image("arithmetic", PixelBuffer.blank(3, 2, (0, 0, 0, 255)))

        result = session.apply_arithmetic("multiply")

        assert {p[:3] for p in result.iter_pixels()} == {(0, 0, 0)}

    def test_geometry_takes_no_second_image(self, session):
        with pytest.raises(InvalidParameterError):
            session.set_second_image("geometry", PixelBuffer.blank(1, 1))

    def test_non_buffer_rejected(self, session):
        with pytest.raises(TypeError):
            session.set_second_image("boolean", "mask.png")


class TestSessionErrors:
    """Tests for validation and error logging."""

    def test_requires_buffer(self):
        with pytest.raises(TypeError):
            EditSession("photo.png")

    def test_unknown_tab(self, session):
        with pytest.raises(InvalidParameterError):
            session.result("sharpen")

    def test_rejected_operation_is_logged(self, labelled_buffer, caplog):
        def failing_executor(node, inputs):
            raise DimensionMismatchError("sizes differ")

        registry = OperationExecutorRegistry()
        registry.register("Grayscale", failing_executor)
        session = EditSession(labelled_buffer, registry=registry)

        with caplog.at_level(logging.WARNING, logger="PL_Libs.SessionLib.edit_session"):
            with pytest.raises(DimensionMismatchError):
                session.apply_grayscale()

        assert "rejected" in caplog.text
        assert not session.has_result("grayscale")

    def test_rejected_resize_is_logged(self, caplog):
        session = EditSession(PixelBuffer(0, 0, b""))
        session.set_second_image("boolean", PixelBuffer.blank(1, 1))

        with caplog.at_level(logging.WARNING, logger="PL_Libs.SessionLib.edit_session"):
            with pytest.raises(InvalidParameterError):
                session.apply_boolean("and")

        assert "Boolean on tab 'boolean' rejected" in caplog.text

    def test_missing_second_image_is_logged(self, session, caplog):
        with caplog.at_level(logging.WARNING, logger="PL_Libs.SessionLib.edit_session"):
            with pytest.raises(MissingInputError):
                session.apply_arithmetic("subtract")

        assert "rejected" in caplog.text
