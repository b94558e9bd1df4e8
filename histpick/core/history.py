"""History rings and the complex command history.

Rings keep their newest entry first, which is also the order every reader
receives them in.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

DEFAULT_RING_SIZE = 64


class HistoryRing:
    """Bounded, append-only record of previous inputs (newest first)."""

    def __init__(self, items: Iterable[str] = (), maxlen: int = DEFAULT_RING_SIZE) -> None:
        self._items: deque[str] = deque(maxlen=maxlen)
        # Incoming items are ordered newest first
        for item in reversed(list(items)):
            self.add(item)

    def add(self, item: str) -> None:
        """Record an input. Skips empty input and repeats of the newest entry."""
        if not item:
            return
        if self._items and self._items[0] == item:
            return
        self._items.appendleft(item)

    def items(self) -> list[str]:
        """Snapshot of the ring, newest first."""
        return list(self._items)

    @property
    def maxlen(self) -> int | None:
        return self._items.maxlen

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self.items())


class HistoryStores:
    """Registry of named history rings available in the environment."""

    def __init__(self) -> None:
        self._rings: dict[str, HistoryRing] = {}

    def bind(self, name: str, ring: HistoryRing | None = None) -> HistoryRing:
        """Make a ring available under name.

        Args:
            name: Store name, e.g. "comint-input-ring".
            ring: Ring to bind. When omitted, an already bound ring is kept
                and otherwise an empty one is created.

        Returns:
            The ring now bound under name.
        """
        if ring is None:
            ring = self._rings.get(name)
        if ring is None:
            ring = HistoryRing()
        self._rings[name] = ring
        return ring

    def unbind(self, name: str) -> None:
        """Remove name if bound. Unknown names are ignored."""
        self._rings.pop(name, None)

    def is_bound(self, name: str) -> bool:
        """True if a ring is bound under name, empty or not."""
        return name in self._rings

    def get(self, name: str) -> HistoryRing:
        """Return the ring bound under name.

        Raises:
            KeyError: If no ring is bound under name.
        """
        return self._rings[name]

    def items(self, name: str) -> list[str]:
        """Elements of the named ring, newest first.

        Raises:
            KeyError: If no ring is bound under name.
        """
        return self._rings[name].items()

    def names(self) -> list[str]:
        return list(self._rings)


@dataclass(frozen=True)
class ComplexCommand:
    """A command that was executed together with its arguments."""

    name: str
    args: tuple[Any, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        rendered = ", ".join(repr(arg) for arg in self.args)
        return f"{self.name}({rendered})"


class CommandHistory:
    """History of executed complex commands, newest first."""

    def __init__(self, maxlen: int = DEFAULT_RING_SIZE) -> None:
        self._commands: deque[ComplexCommand] = deque(maxlen=maxlen)

    def record(self, name: str, *args: Any) -> ComplexCommand:
        command = ComplexCommand(name, tuple(args))
        if not self._commands or self._commands[0] != command:
            self._commands.appendleft(command)
        return command

    def commands(self) -> list[ComplexCommand]:
        return list(self._commands)

    def as_strings(self) -> list[str]:
        """String form of every recorded command, newest first."""
        return [str(command) for command in self._commands]

    def __len__(self) -> int:
        return len(self._commands)
