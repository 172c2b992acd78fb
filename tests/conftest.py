"""
Pytest configuration and shared fixtures for Pixel Lab tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest

from PL_Libs.PixelEngineLib.pixel_models import PixelBuffer


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 128),  # Half-transparent gray
    ]


@pytest.fixture
def color_buffer(sample_rgba_colors):
    """3x2 buffer holding the sample colors in row-major order."""
    return PixelBuffer.from_pixels(3, 2, sample_rgba_colors)


@pytest.fixture
def labelled_buffer():
    """
    3x2 buffer where every pixel is distinct, alpha included.

    Layout:
        A B C
        D E F
    """
    return PixelBuffer.from_pixels(3, 2, [
        (1, 2, 3, 10),      # A
        (4, 5, 6, 20),      # B
        (7, 8, 9, 30),      # C
        (10, 11, 12, 40),   # D
        (13, 14, 15, 50),   # E
        (16, 17, 18, 60),   # F
    ])


@pytest.fixture
def strip_buffer():
    """2x1 buffer with two opaque pixels."""
    return PixelBuffer.from_pixels(2, 1, [(10, 20, 30, 255), (200, 100, 50, 255)])
