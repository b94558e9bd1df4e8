"""Editing context models.

The host describes where the cursor currently is with an EditingContext.
The resolver only ever compares ContextKind tags by equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

REPEAT_COMPLEX_COMMAND = "repeat_complex_command"


class ContextKind(Enum):
    """Kinds of editing context a buffer or prompt can be in."""

    MINIBUFFER = "minibuffer"
    SHELL = "shell"
    ESHELL = "eshell"
    TERM = "term"
    TEXT = "text"

    @classmethod
    def from_name(cls, name: str) -> ContextKind:
        """Look up a kind by its value, e.g. "shell"."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown context kind '{name}' (expected one of: {valid})") from None


@dataclass
class EditingContext:
    """Snapshot of the host state the resolver cares about."""

    kind: ContextKind = ContextKind.TEXT
    last_command: str | None = None
    in_prompt: bool = False

    @property
    def after_repeat_complex_command(self) -> bool:
        return self.last_command == REPEAT_COMPLEX_COMMAND
