"""Document adapters for Textual widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.document import DocumentWrapper

if TYPE_CHECKING:
    from textual.widgets import Input, TextArea


class TextAreaDocument(DocumentWrapper):
    """Wraps a TextArea; read-only state lives on the widget."""

    def __init__(self, text_area: TextArea) -> None:
        super().__init__()
        self._ta = text_area

    @property
    def read_only(self) -> bool:
        return self._ta.read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self._ta.read_only = value

    @property
    def text(self) -> str:
        return self._ta.text

    def _insert(self, text: str) -> None:
        result = self._ta.insert(text)
        self._ta.move_cursor(result.end_location)

    def _clear(self) -> None:
        self._ta.clear()


class InputDocument(DocumentWrapper):
    """Wraps a single-line Input."""

    def __init__(self, input_widget: Input) -> None:
        super().__init__()
        self._input = input_widget

    @property
    def text(self) -> str:
        return self._input.value

    def _insert(self, text: str) -> None:
        # Inputs are single line
        self._input.insert_text_at_cursor(text.replace("\n", " "))

    def _clear(self) -> None:
        self._input.value = ""
