"""Modal screens for histpick."""

from .item_picker import ItemPickerScreen

__all__ = ["ItemPickerScreen"]
