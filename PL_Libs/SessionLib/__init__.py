"""
SessionLib - Editing session state

This module holds the explicit per-caller state used by presentation
layers on top of the pixel engine.
"""

from PL_Libs.SessionLib.edit_session import EditSession

__all__ = ["EditSession"]
