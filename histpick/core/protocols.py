"""Protocols describing what histpick needs from its host."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .candidates import CandidateSource
    from .context import EditingContext
    from .document import DocumentWrapper
    from .features import FeatureRegistry
    from .history import CommandHistory, HistoryStores
    from .keymap import KeymapRegistry


class SettingsStoreProtocol(Protocol):
    """Persistent settings access."""

    def load_all(self) -> dict: ...

    def save_all(self, settings: dict) -> None: ...

    def get(self, key: str, default: Any = None) -> Any: ...


class HostProtocol(Protocol):
    """The editor facilities the extension reads and drives."""

    history_stores: HistoryStores
    command_history: CommandHistory
    keymap_registry: KeymapRegistry
    feature_registry: FeatureRegistry

    def current_context(self) -> EditingContext: ...

    def active_prompt_history(self) -> Sequence[str]:
        """History list of the prompt that is active right now."""
        ...

    async def completing_read(
        self,
        label: str,
        source: CandidateSource,
        *,
        default: str | None = None,
        require_match: bool = True,
        recursive: bool = True,
    ) -> str:
        """Let the user pick from source. Returns "" on cancel."""
        ...

    def current_document(self) -> DocumentWrapper: ...

    def clear_prompt(self) -> None: ...
