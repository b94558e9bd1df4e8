"""Document wrapper used by the insertion command.

Subclasses adapt a concrete editing widget; the command only needs to
insert at the cursor, clear, and temporarily lift read-only protection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager


class DocumentWrapper(ABC):
    """Minimal editable document API."""

    def __init__(self) -> None:
        self._read_only = False

    @property
    def read_only(self) -> bool:
        return self._read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self._read_only = value

    @property
    @abstractmethod
    def text(self) -> str:
        """Full document text."""

    @abstractmethod
    def _insert(self, text: str) -> None:
        """Insert text at the cursor without any protection checks."""

    @abstractmethod
    def _clear(self) -> None:
        """Remove all text without any protection checks."""

    def insert(self, text: str) -> None:
        """Insert text at the cursor.

        Raises:
            PermissionError: If the document is read-only.
        """
        if self.read_only:
            raise PermissionError("Document is read-only")
        self._insert(text)

    def clear(self) -> None:
        if self.read_only:
            raise PermissionError("Document is read-only")
        self._clear()

    @contextmanager
    def privileged(self) -> Iterator[DocumentWrapper]:
        """Lift read-only protection for the duration of the block."""
        previous = self.read_only
        self.read_only = False
        try:
            yield self
        finally:
            self.read_only = previous


class StringDocument(DocumentWrapper):
    """In-memory document with a cursor offset."""

    def __init__(self, text: str = "", cursor: int | None = None, read_only: bool = False) -> None:
        super().__init__()
        self._text = text
        self.cursor = len(text) if cursor is None else cursor
        self.read_only = read_only

    @property
    def text(self) -> str:
        return self._text

    def _insert(self, text: str) -> None:
        self._text = self._text[: self.cursor] + text + self._text[self.cursor :]
        self.cursor += len(text)

    def _clear(self) -> None:
        self._text = ""
        self.cursor = 0
