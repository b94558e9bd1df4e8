"""Main Textual application for histpick.

The app is a small editor host: one buffer whose mode decides its keymap and
history ring, and a single-line prompt with per-prompt history. Keys are
looked up in the active keymap before the widgets see them, so commands such
as insert_item can be bound per mode.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Static
from textual.worker import Worker, WorkerState

from ..config import HistPickConfig
from ..core import (
    INSERT_ITEM_COMMAND,
    REPEAT_COMPLEX_COMMAND,
    CandidateSource,
    CommandHistory,
    ComplexCommand,
    ContextKind,
    DocumentWrapper,
    EditingContext,
    FeatureRegistry,
    HistoryRing,
    HistoryStores,
    HistPickError,
    KeymapRegistry,
    insert_item,
    setup_keybinding,
)
from .documents import InputDocument, TextAreaDocument
from .screens.item_picker import ItemPickerScreen
from .widgets import BufferArea, PromptInput

GLOBAL_MAP = "global-map"
MINIBUFFER_MAP = "minibuffer-local-map"
MINIBUFFER_FEATURE = "minibuffer"
COMMAND_GROUP = "commands"
SHELL_PROMPT = "$ "

PROMPT_HISTORIES = (
    "extended-command-history",
    "shell-command-history",
    "search-ring",
)


@dataclass(frozen=True)
class ModeInfo:
    """What a buffer mode brings with it."""

    kind: ContextKind
    keymap: str
    feature: str | None = None
    ring: str | None = None

    @property
    def hook(self) -> str:
        return f"{self.kind.value}-mode-hook"

    @property
    def shell_like(self) -> bool:
        return self.ring is not None


MODES: dict[ContextKind, ModeInfo] = {
    ContextKind.TEXT: ModeInfo(ContextKind.TEXT, "text-mode-map"),
    ContextKind.SHELL: ModeInfo(ContextKind.SHELL, "shell-mode-map", "shell", "comint-input-ring"),
    ContextKind.ESHELL: ModeInfo(ContextKind.ESHELL, "eshell-mode-map", "eshell", "eshell-history-ring"),
    ContextKind.TERM: ModeInfo(ContextKind.TERM, "term-mode-map", "term", "term-input-ring"),
}

GLOBAL_BINDINGS = {
    "alt+x": "execute_extended_command",
    "alt+exclamation_mark": "shell_command",
    "ctrl+x": REPEAT_COMPLEX_COMMAND,
    "alt+s": "search_forward",
    "f2": "cycle_buffer_kind",
}


@dataclass
class PromptState:
    """The prompt currently reading input."""

    label: str
    history: str | None
    on_submit: Callable[[str], None]


class HistPickApp(App):
    """Editor host for the insert-from-history command."""

    TITLE = "histpick"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    #buffer {
        height: 1fr;
        border: none;
    }

    #status-bar {
        height: 1;
        background: $primary-darken-2;
        padding: 0 1;
    }

    #prompt-bar {
        height: 1;
        display: none;
    }

    #prompt-label {
        width: auto;
        color: $primary;
    }

    #prompt-input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
    }
    """

    def __init__(
        self,
        config: HistPickConfig | None = None,
        *,
        buffer_kind: ContextKind = ContextKind.TEXT,
        legacy_hooks: bool = False,
    ) -> None:
        super().__init__()
        self.histpick_config = config or HistPickConfig()
        self.history_stores = HistoryStores()
        self.command_history = CommandHistory(maxlen=self.histpick_config.ring_size)
        self.keymap_registry = KeymapRegistry()
        self.feature_registry = FeatureRegistry(supports_load_callbacks=not legacy_hooks)
        self.buffer_kind = buffer_kind
        self._initial_kind = buffer_kind
        self._prompt: PromptState | None = None
        self._last_command: str | None = None
        self._this_command: str | None = None
        self._repeatable: dict[str, Callable[..., None]] = {
            "execute_extended_command": self._run_extended_command,
            "shell_command": self._run_shell_command,
        }

        for name in PROMPT_HISTORIES:
            self.history_stores.bind(name, HistoryRing(maxlen=self.histpick_config.ring_size))

        self._define_keymaps()
        setup_keybinding(self, self.histpick_config)

    def _define_keymaps(self) -> None:
        global_map = self.keymap_registry.define(GLOBAL_MAP)
        for key, command in GLOBAL_BINDINGS.items():
            global_map.bind(key, command)

        minibuffer_map = self.keymap_registry.define(MINIBUFFER_MAP)
        minibuffer_map.bind("escape", "keyboard_quit")

        for info in MODES.values():
            keymap = self.keymap_registry.define(info.keymap, parent=global_map)
            if info.shell_like:
                keymap.bind("enter", "send_input")

    def compose(self) -> ComposeResult:
        with Vertical(id="main"):
            yield BufferArea(id="buffer")
            yield Static(id="status-bar")
            with Horizontal(id="prompt-bar"):
                yield Static(id="prompt-label")
                yield PromptInput(id="prompt-input")

    def on_mount(self) -> None:
        self.feature_registry.provide(MINIBUFFER_FEATURE)
        self.set_buffer_kind(self._initial_kind)
        self.buffer_area.focus()

    @property
    def buffer_area(self) -> BufferArea:
        return self.query_one("#buffer", BufferArea)

    @property
    def prompt_input(self) -> PromptInput:
        return self.query_one("#prompt-input", PromptInput)

    @property
    def prompt_active(self) -> bool:
        return self._prompt is not None

    # ─────────────────────────────────────────────────────────────────
    # Host interface
    # ─────────────────────────────────────────────────────────────────

    def current_context(self) -> EditingContext:
        in_prompt = self.prompt_active
        return EditingContext(
            kind=ContextKind.MINIBUFFER if in_prompt else self.buffer_kind,
            last_command=self._last_command,
            in_prompt=in_prompt,
        )

    def active_prompt_history(self) -> Sequence[str]:
        if self._prompt is None or self._prompt.history is None:
            return []
        if not self.history_stores.is_bound(self._prompt.history):
            return []
        return self.history_stores.items(self._prompt.history)

    async def completing_read(
        self,
        label: str,
        source: CandidateSource,
        *,
        default: str | None = None,
        require_match: bool = True,
        recursive: bool = True,
    ) -> str:
        if not recursive and (self.prompt_active or len(self.screen_stack) > 1):
            raise HistPickError("Command attempted to open a prompt while in a prompt")
        screen = ItemPickerScreen(label, source, default=default, require_match=require_match)
        result = await self.push_screen_wait(screen)
        return result or ""

    def current_document(self) -> DocumentWrapper:
        if self.prompt_active:
            return InputDocument(self.prompt_input)
        return TextAreaDocument(self.buffer_area)

    def clear_prompt(self) -> None:
        InputDocument(self.prompt_input).clear()

    # ─────────────────────────────────────────────────────────────────
    # Key and command dispatch
    # ─────────────────────────────────────────────────────────────────

    def route_key(self, keymap_name: str, key: str) -> bool:
        """Run the command bound to key. Returns True if the key was consumed."""
        if keymap_name not in self.keymap_registry:
            return False
        keymap = self.keymap_registry.get(keymap_name)
        command = keymap.lookup(key)

        if command is None:
            self._note_command(None)
            # Disabled keys are swallowed instead of reaching the widget
            return keymap.defines(key)

        self._note_command(command)
        self.call_command(command)
        return True

    def _note_command(self, command: str | None) -> None:
        self._last_command, self._this_command = self._this_command, command

    def has_command(self, name: str) -> bool:
        return callable(getattr(self, f"command_{name}", None))

    def call_command(self, name: str) -> bool:
        handler = getattr(self, f"command_{name}", None)
        if not callable(handler):
            self.notify(f"Unknown command: {name}", severity="error")
            return False
        handler()
        return True

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.group != COMMAND_GROUP:
            return
        if event.state == WorkerState.ERROR:
            self.notify(f"{event.worker.name} failed: {event.worker.error}", severity="error")

    # ─────────────────────────────────────────────────────────────────
    # Buffer modes
    # ─────────────────────────────────────────────────────────────────

    def set_buffer_kind(self, kind: ContextKind) -> None:
        """Switch the buffer's mode, loading the mode's feature on first use."""
        info = MODES[kind]
        self.buffer_kind = kind
        self.buffer_area.keymap_name = info.keymap

        if info.ring is not None and not self.history_stores.is_bound(info.ring):
            self.history_stores.bind(info.ring, HistoryRing(maxlen=self.histpick_config.ring_size))
        if info.feature is not None:
            self.feature_registry.provide(info.feature)
        self.feature_registry.run_hooks(info.hook)

        if info.shell_like and not self.buffer_area.text:
            result = self.buffer_area.insert(SHELL_PROMPT)
            self.buffer_area.move_cursor(result.end_location)
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        keymap = self.keymap_registry.get(MODES[self.buffer_kind].keymap)
        binding = self.histpick_config.binding
        hint = f"{binding}: insert item" if keymap.lookup(binding) == INSERT_ITEM_COMMAND else ""
        self.query_one("#status-bar", Static).update(f"[{self.buffer_kind.value}]  {hint}")

    # ─────────────────────────────────────────────────────────────────
    # Prompt
    # ─────────────────────────────────────────────────────────────────

    def read_from_prompt(
        self,
        label: str,
        history: str | None,
        on_submit: Callable[[str], None],
        initial: str = "",
    ) -> None:
        """Open the prompt; on_submit receives the entered text."""
        self._prompt = PromptState(label, history, on_submit)
        self.query_one("#prompt-label", Static).update(label)
        self.prompt_input.value = initial
        self.query_one("#prompt-bar").display = True
        self.prompt_input.focus()

    def _close_prompt(self) -> None:
        self._prompt = None
        self.prompt_input.value = ""
        self.query_one("#prompt-bar").display = False
        self.buffer_area.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is not self.prompt_input or self._prompt is None:
            return
        event.stop()

        prompt = self._prompt
        value = event.value
        self._close_prompt()
        if prompt.history is not None and self.history_stores.is_bound(prompt.history):
            self.history_stores.get(prompt.history).add(value)
        prompt.on_submit(value)

    # ─────────────────────────────────────────────────────────────────
    # Commands
    # ─────────────────────────────────────────────────────────────────

    def command_insert_item(self) -> None:
        self.run_worker(
            insert_item(self, self.histpick_config),
            name=INSERT_ITEM_COMMAND,
            group=COMMAND_GROUP,
            exit_on_error=False,
        )

    def command_keyboard_quit(self) -> None:
        if self.prompt_active:
            self._close_prompt()

    def command_execute_extended_command(self) -> None:
        self.read_from_prompt("M-x ", "extended-command-history", self._run_extended_command)

    def _run_extended_command(self, name: str) -> None:
        name = name.strip().replace("-", "_")
        if not name:
            return
        if not self.has_command(name):
            self.notify(f"Unknown command: {name}", severity="error")
            return
        self.command_history.record("execute_extended_command", name)
        self._note_command(name)
        self.call_command(name)

    def command_shell_command(self) -> None:
        self.read_from_prompt("Shell command: ", "shell-command-history", self._run_shell_command)

    def _run_shell_command(self, text: str) -> None:
        if not text.strip():
            return
        self.command_history.record("shell_command", text)
        self.notify(f"{SHELL_PROMPT}{text}")

    def command_repeat_complex_command(self) -> None:
        commands = self.command_history.commands()
        if not commands:
            self.notify("No repeatable command", severity="warning")
            return
        self.read_from_prompt("Redo: ", None, self._replay, initial=str(commands[0]))

    def _replay(self, text: str) -> None:
        command = self._find_complex_command(text)
        if command is None:
            self.notify(f"Not a previous command: {text}", severity="warning")
            return
        self._repeatable[command.name](*command.args)

    def _find_complex_command(self, text: str) -> ComplexCommand | None:
        for command in self.command_history.commands():
            if str(command) == text.strip() and command.name in self._repeatable:
                return command
        return None

    def command_search_forward(self) -> None:
        self.read_from_prompt("Search: ", "search-ring", self._search_forward)

    def _search_forward(self, needle: str) -> None:
        if not needle:
            return
        text = self.buffer_area.text
        start = _offset_of(text, self.buffer_area.cursor_location)
        index = text.find(needle, start)
        if index == -1:
            self.notify(f"Search failed: {needle}", severity="warning")
            return
        self.buffer_area.move_cursor(_location_of(text, index + len(needle)))

    def command_send_input(self) -> None:
        """Record the current shell line in the mode's ring and start a new one."""
        info = MODES[self.buffer_kind]
        area = self.buffer_area
        row, _ = area.cursor_location
        line = area.document.get_line(row)
        entry = line.removeprefix(SHELL_PROMPT).strip()
        if info.ring is not None and entry:
            self.history_stores.get(info.ring).add(entry)
        area.move_cursor((row, len(line)))
        result = area.insert("\n" + SHELL_PROMPT)
        area.move_cursor(result.end_location)

    def command_cycle_buffer_kind(self) -> None:
        kinds = list(MODES)
        index = kinds.index(self.buffer_kind)
        self.set_buffer_kind(kinds[(index + 1) % len(kinds)])
        self.notify(f"Mode: {self.buffer_kind.value}")


def _offset_of(text: str, location: tuple[int, int]) -> int:
    row, col = location
    lines = text.split("\n")
    return sum(len(line) + 1 for line in lines[:row]) + col


def _location_of(text: str, offset: int) -> tuple[int, int]:
    before = text[:offset]
    row = before.count("\n")
    col = len(before) - (before.rfind("\n") + 1)
    return (row, col)
