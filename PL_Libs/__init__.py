"""
PL_Libs - Pixel Lab Library Modules

This package contains core functionality for the Pixel Lab project,
organized into specialized sub-packages:

- PixelEngineLib: Pixel buffer model and the pixel transform engine
- OpsLib: Operation executor registry and operation nodes
- SessionLib: Per-caller editing session state
"""

__version__ = "0.1.0"
