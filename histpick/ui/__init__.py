"""Textual host for histpick."""

from .app import MODES, HistPickApp, ModeInfo
from .screens import ItemPickerScreen

__all__ = [
    "HistPickApp",
    "ItemPickerScreen",
    "MODES",
    "ModeInfo",
]
