"""Install the insertion command into the configured keymaps."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from .commands import INSERT_ITEM_COMMAND

if TYPE_CHECKING:
    from ..config import HistPickConfig, KeyBindingSpec
    from .keymap import KeymapRegistry
    from .protocols import HostProtocol


def bind_insert_item(keymaps: KeymapRegistry, keymap_name: str, config: HistPickConfig) -> None:
    """Bind the insertion key in one keymap.

    Raises:
        ConfigurationError: If keymap_name is not defined by the host.
    """
    keymap = keymaps.get(keymap_name)
    keymap.bind(config.binding, INSERT_ITEM_COMMAND)
    if config.unbind_companion_key:
        keymap.disable(config.companion_key)


def uses_hook(host: HostProtocol, entry: KeyBindingSpec) -> bool:
    """True when entry must be installed from its creation hook."""
    return entry.hook is not None and not host.feature_registry.supports_load_callbacks


def setup_keybinding(host: HostProtocol, config: HistPickConfig) -> None:
    """Arrange for every configured keymap to get the insertion binding.

    Bindings wait for their feature to load. On hosts without load
    callbacks, entries that name a creation hook are attached to that hook
    instead and rerun for every new context instance.
    """
    for entry in config.keymaps:
        action = partial(bind_insert_item, host.keymap_registry, entry.keymap, config)
        if uses_hook(host, entry):
            host.feature_registry.add_hook(entry.hook, action)
        else:
            host.feature_registry.notify_on_load(entry.feature, action)
