"""Editing widgets that consult histpick keymaps before their own keys."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, cast

from textual.events import Key
from textual.widgets import Input, TextArea

if TYPE_CHECKING:
    from textual.app import App


class KeymapDispatcher(Protocol):
    """What the widgets need from the app to route keys."""

    def route_key(self, keymap_name: str, key: str) -> bool: ...


def _dispatcher(app: App) -> KeymapDispatcher | None:
    if hasattr(app, "route_key"):
        return cast("KeymapDispatcher", app)
    return None


class BufferArea(TextArea):
    """Main editing buffer. Its keymap follows the buffer's mode."""

    keymap_name: str = "text-mode-map"

    async def _on_key(self, event: Key) -> None:
        dispatcher = _dispatcher(self.app)
        if dispatcher is not None and dispatcher.route_key(self.keymap_name, event.key):
            event.prevent_default()
            event.stop()
            return

        await super()._on_key(event)


class PromptInput(Input):
    """Single-line prompt (the minibuffer)."""

    keymap_name: str = "minibuffer-local-map"

    async def _on_key(self, event: Key) -> None:
        dispatcher = _dispatcher(self.app)
        if dispatcher is not None and dispatcher.route_key(self.keymap_name, event.key):
            event.prevent_default()
            event.stop()
            return

        await super()._on_key(event)
