"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace).

This module loads the Pillow-provided Image module via importlib and
re-exports it together with the resampling filter used when a second image
has to be resized to match the primary one. Pillow moved its filter constants
into `Image.Resampling` in 9.1; both layouts are handled here so callers never
need to know which version is installed.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image

# Smooth interpolation for resize-to-match
BILINEAR = getattr(Image, "Resampling", Image).BILINEAR
