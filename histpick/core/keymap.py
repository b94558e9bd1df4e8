"""Named keymaps with parent fallthrough.

A keymap maps Textual key names (e.g. "alt+r") to command names. A key can
also be explicitly disabled: lookup then stops at this keymap and reports no
command instead of consulting the parent.
"""

from __future__ import annotations

from .exceptions import ConfigurationError

# Sentinel stored for explicitly disabled keys
_DISABLED = None


class Keymap:
    """A set of key -> command bindings."""

    def __init__(self, name: str, parent: Keymap | None = None) -> None:
        self.name = name
        self.parent = parent
        self._bindings: dict[str, str | None] = {}

    def bind(self, key: str, command: str) -> None:
        """Bind key to a command name."""
        self._bindings[key] = command

    def disable(self, key: str) -> None:
        """Record key as bound to nothing, shadowing any parent binding."""
        self._bindings[key] = _DISABLED

    def unbind(self, key: str) -> None:
        """Forget key entirely, letting lookup fall through to the parent."""
        self._bindings.pop(key, None)

    def is_disabled(self, key: str) -> bool:
        return key in self._bindings and self._bindings[key] is _DISABLED

    def defines(self, key: str) -> bool:
        """True if key has an entry here or in a parent, disabled entries included."""
        if key in self._bindings:
            return True
        return self.parent is not None and self.parent.defines(key)

    def lookup(self, key: str) -> str | None:
        """Return the command bound to key, or None if nothing runs."""
        if key in self._bindings:
            return self._bindings[key]
        if self.parent is not None:
            return self.parent.lookup(key)
        return None

    def bindings(self) -> dict[str, str | None]:
        """Local bindings, including disabled keys."""
        return dict(self._bindings)

    def __repr__(self) -> str:
        return f"Keymap({self.name!r}, {len(self._bindings)} bindings)"


class KeymapRegistry:
    """Keymaps the host has defined, looked up by name."""

    def __init__(self) -> None:
        self._keymaps: dict[str, Keymap] = {}

    def define(self, name: str, parent: Keymap | str | None = None) -> Keymap:
        """Create (or return the existing) keymap called name."""
        if name in self._keymaps:
            return self._keymaps[name]
        if isinstance(parent, str):
            parent = self.get(parent)
        keymap = Keymap(name, parent)
        self._keymaps[name] = keymap
        return keymap

    def get(self, name: str) -> Keymap:
        """Look up a keymap.

        Raises:
            ConfigurationError: If no keymap with that name is defined.
        """
        try:
            return self._keymaps[name]
        except KeyError:
            raise ConfigurationError(f"Keymap '{name}' is not defined", name=name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._keymaps

    def names(self) -> list[str]:
        return list(self._keymaps)
