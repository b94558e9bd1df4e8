"""Completion prompt for picking one item from a candidate source."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ...core.candidates import CandidateSource


class ItemPickerScreen(ModalScreen[str]):
    """Modal prompt that filters candidates as you type.

    Dismisses with the chosen candidate, or "" when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
    ]

    CSS = """
    ItemPickerScreen {
        align: center bottom;
        background: transparent;
    }

    #picker-dialog {
        width: 100%;
        height: auto;
        max-height: 60%;
        background: $surface;
        border-top: solid $primary;
    }

    #picker-prompt {
        height: 1;
    }

    #picker-label {
        width: auto;
        color: $primary;
    }

    #picker-filter {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
    }

    #picker-list {
        height: auto;
        max-height: 15;
        border: none;
        padding: 0;
    }

    #picker-empty {
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        label: str,
        source: CandidateSource,
        *,
        default: str | None = None,
        require_match: bool = True,
    ) -> None:
        super().__init__()
        self.label = label
        self.source = source
        self.default = default
        self.require_match = require_match
        self.search_text = ""
        self._matches: list[str] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-dialog"):
            yield OptionList(id="picker-list")
            yield Static("No items", id="picker-empty")
            with Horizontal(id="picker-prompt"):
                yield Static(self.label, id="picker-label")
                yield Input(id="picker-filter")

    def on_mount(self) -> None:
        option_list = self.query_one("#picker-list", OptionList)
        option_list.can_focus = False
        self._rebuild_list()
        self.query_one("#picker-filter", Input).focus()

    @property
    def matches(self) -> list[str]:
        """Candidates currently shown, in display order."""
        return list(self._matches)

    def _rebuild_list(self) -> None:
        self._matches = self.source.filter(self.search_text)

        option_list = self.query_one("#picker-list", OptionList)
        option_list.clear_options()
        # Text() keeps markup-like history entries literal
        option_list.add_options([Option(Text(item)) for item in self._matches])
        if self._matches:
            option_list.highlighted = 0

        self.query_one("#picker-empty", Static).display = not self._matches

    def _highlighted_choice(self) -> str | None:
        option_list = self.query_one("#picker-list", OptionList)
        index = option_list.highlighted
        if index is None or not 0 <= index < len(self._matches):
            return None
        return self._matches[index]

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.search_text = event.value
        self._rebuild_list()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_select()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if 0 <= event.option_index < len(self._matches):
            self.dismiss(self._matches[event.option_index])

    def action_select(self) -> None:
        choice = self._highlighted_choice()
        if choice is not None:
            self.dismiss(choice)
            return

        if not self.search_text:
            self.dismiss(self.default or "")
            return

        if not self.require_match or self.source.contains(self.search_text):
            self.dismiss(self.search_text)
            return

        # Not a candidate; keep the prompt open
        self.app.bell()

    def action_cancel(self) -> None:
        self.dismiss("")

    def action_move_up(self) -> None:
        self.query_one("#picker-list", OptionList).action_cursor_up()

    def action_move_down(self) -> None:
        self.query_one("#picker-list", OptionList).action_cursor_down()

    def check_action(self, action: str, parameters: tuple) -> bool | None:
        # Prevent underlying screens from receiving actions when another modal is on top.
        if self.app.screen is not self:
            return False
        return super().check_action(action, parameters)
