"""Configuration types for histpick.

HistPickConfig is built once at startup (defaults or parsed settings) and
passed explicitly into the resolver, the insertion command and the
keybinding installer.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .core.context import ContextKind

CONFIG_DIR = Path(os.environ.get("HISTPICK_CONFIG_DIR", "~/.histpick")).expanduser()
SETTINGS_PATH = CONFIG_DIR / "settings.json"
SETTINGS_KEY = "histpick"


@dataclass(frozen=True)
class ContextBinding:
    """Which history store to read in a given kind of context."""

    kind: ContextKind
    store: str


@dataclass(frozen=True)
class KeyBindingSpec:
    """A keymap to install the insertion command into once feature loads."""

    feature: str
    keymap: str
    hook: str | None = None  # Per-instance creation hook (legacy hosts)


DEFAULT_INPUT_RINGS: tuple[ContextBinding, ...] = (
    ContextBinding(ContextKind.ESHELL, "eshell-history-ring"),
    ContextBinding(ContextKind.SHELL, "comint-input-ring"),
    ContextBinding(ContextKind.TERM, "term-input-ring"),
)

DEFAULT_KEYMAPS: tuple[KeyBindingSpec, ...] = (
    KeyBindingSpec("minibuffer", "minibuffer-local-map"),
    KeyBindingSpec("shell", "shell-mode-map"),
    KeyBindingSpec("eshell", "eshell-mode-map", hook="eshell-mode-hook"),
    KeyBindingSpec("term", "term-mode-map"),
)

DEFAULT_BINDING = "alt+r"
DEFAULT_COMPANION_KEY = "alt+s"
DEFAULT_PROMPT_LABEL = "Item: "


@dataclass(frozen=True)
class HistPickConfig:
    """Static extension configuration."""

    input_rings: tuple[ContextBinding, ...] = DEFAULT_INPUT_RINGS
    keymaps: tuple[KeyBindingSpec, ...] = DEFAULT_KEYMAPS
    binding: str = DEFAULT_BINDING
    unbind_companion_key: bool = True
    companion_key: str = DEFAULT_COMPANION_KEY
    prompt_label: str = DEFAULT_PROMPT_LABEL
    ring_size: int = 64
