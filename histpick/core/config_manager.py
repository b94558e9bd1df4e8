"""Load HistPickConfig from user settings."""

from __future__ import annotations

import sys
from typing import Any

from ..config import (
    DEFAULT_PROMPT_LABEL,
    SETTINGS_KEY,
    ContextBinding,
    HistPickConfig,
    KeyBindingSpec,
)
from .context import ContextKind
from .protocols import SettingsStoreProtocol

CONFIG_FIELDS = {
    "input_rings",
    "keymaps",
    "binding",
    "unbind_companion_key",
    "companion_key",
    "prompt_label",
    "ring_size",
}


class ConfigManager:
    """Builds the extension configuration from the settings store."""

    def __init__(self, settings_store: SettingsStoreProtocol | None = None) -> None:
        """Create a manager.

        Args:
            settings_store: Store to read from. Defaults to the shared
                SettingsStore instance.
        """
        from ..settings import SettingsStore

        self._settings_store = settings_store or SettingsStore.get_instance()
        self._config = HistPickConfig()
        self._error: str | None = None

    @property
    def config(self) -> HistPickConfig:
        return self._config

    @property
    def error(self) -> str | None:
        """Message of the last failed load, if any."""
        return self._error

    def initialize(self) -> HistPickConfig:
        """Load settings and parse the histpick section.

        Falls back to the defaults when the settings cannot be read or are
        invalid, and records the reason in error.

        Returns:
            The active configuration.
        """
        try:
            settings = self._settings_store.load_all()
            self._config = self.parse(settings.get(SETTINGS_KEY, {}))
            self._error = None
        except Exception as exc:
            self._error = str(exc)
            self._config = HistPickConfig()
            print(f"[histpick] Failed to load configuration: {exc}", file=sys.stderr)
        return self._config

    def parse(self, data: Any) -> HistPickConfig:
        """Parse a settings object into a HistPickConfig.

        Args:
            data: Value of the "histpick" settings key.

        Returns:
            Configuration with defaults for every missing field.

        Raises:
            ValueError: If any field is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f'"{SETTINGS_KEY}" must be a JSON object.')

        unknown = set(data) - CONFIG_FIELDS
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        if "input_rings" in data:
            kwargs["input_rings"] = self._parse_input_rings(data["input_rings"])
        if "keymaps" in data:
            kwargs["keymaps"] = self._parse_keymaps(data["keymaps"])

        for name in ("binding", "companion_key"):
            if name in data:
                value = data[name]
                if not isinstance(value, str) or not value:
                    raise ValueError(f'"{name}" must be a non-empty string.')
                kwargs[name] = value

        if "unbind_companion_key" in data:
            if not isinstance(data["unbind_companion_key"], bool):
                raise ValueError('"unbind_companion_key" must be a boolean.')
            kwargs["unbind_companion_key"] = data["unbind_companion_key"]

        if "prompt_label" in data:
            if not isinstance(data["prompt_label"], str):
                raise ValueError('"prompt_label" must be a string.')
            kwargs["prompt_label"] = data["prompt_label"] or DEFAULT_PROMPT_LABEL

        if "ring_size" in data:
            ring_size = data["ring_size"]
            if isinstance(ring_size, bool) or not isinstance(ring_size, int) or ring_size < 1:
                raise ValueError('"ring_size" must be a positive integer.')
            kwargs["ring_size"] = ring_size

        config = HistPickConfig(**kwargs)
        if config.unbind_companion_key and config.companion_key == config.binding:
            raise ValueError(
                f'"companion_key" ({config.companion_key}) '
                "cannot be the same key as \"binding\"."
            )
        return config

    def _parse_input_rings(self, data: Any) -> tuple[ContextBinding, ...]:
        """Parse input rings from a list of {"kind", "store"} objects.

        An object mapping kind -> store is accepted as well.

        Args:
            data: Value of the "input_rings" setting.

        Returns:
            Context bindings in configured order.

        Raises:
            ValueError: If an entry is malformed or names an unknown kind.
        """
        if isinstance(data, dict):
            data = [{"kind": kind, "store": store} for kind, store in data.items()]
        if not isinstance(data, list):
            raise ValueError('"input_rings" must be a list.')

        bindings = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"Input ring at index {i} must be an object.")

            kind = item.get("kind")
            store = item.get("store")

            if not isinstance(kind, str) or not kind:
                raise ValueError(f'Input ring at index {i} missing required "kind".')
            if not isinstance(store, str) or not store:
                raise ValueError(f'Input ring at index {i} missing required "store".')

            try:
                context_kind = ContextKind.from_name(kind)
            except ValueError as exc:
                raise ValueError(f"Input ring at index {i}: {exc}") from exc

            bindings.append(ContextBinding(context_kind, store))

        return tuple(bindings)

    def _parse_keymaps(self, data: Any) -> tuple[KeyBindingSpec, ...]:
        """Parse keymap entries from a list of {"feature", "keymap", "hook"} objects.

        Args:
            data: Value of the "keymaps" setting.

        Returns:
            Key binding entries in configured order.

        Raises:
            ValueError: If an entry is malformed.
        """
        if not isinstance(data, list):
            raise ValueError('"keymaps" must be a list.')

        specs = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"Keymap at index {i} must be an object.")

            feature = item.get("feature")
            keymap = item.get("keymap")

            if not isinstance(feature, str) or not feature:
                raise ValueError(f'Keymap at index {i} missing required "feature".')
            if not isinstance(keymap, str) or not keymap:
                raise ValueError(f'Keymap at index {i} missing required "keymap".')

            hook = item.get("hook")
            if hook is not None and not isinstance(hook, str):
                raise ValueError(f'Keymap at index {i} "hook" must be a string.')

            specs.append(KeyBindingSpec(feature=feature, keymap=keymap, hook=hook or None))

        return tuple(specs)
