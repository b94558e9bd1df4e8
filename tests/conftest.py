"""Shared fixtures for histpick tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from histpick.core import (
    CandidateSource,
    CommandHistory,
    ContextKind,
    EditingContext,
    FeatureRegistry,
    HistoryStores,
    KeymapRegistry,
    StringDocument,
)


class FakeHost:
    """In-memory host that records what the extension asks of it."""

    def __init__(
        self,
        kind: ContextKind = ContextKind.TEXT,
        *,
        in_prompt: bool = False,
        last_command: str | None = None,
        answer: str | Callable[[CandidateSource], str] = "",
        supports_load_callbacks: bool = True,
    ) -> None:
        self.history_stores = HistoryStores()
        self.command_history = CommandHistory()
        self.keymap_registry = KeymapRegistry()
        self.feature_registry = FeatureRegistry(supports_load_callbacks=supports_load_callbacks)
        self.context = EditingContext(kind=kind, last_command=last_command, in_prompt=in_prompt)
        self.prompt_history: list[str] = []
        self.prompt = StringDocument()
        self.buffer = StringDocument()
        self.answer = answer
        self.reads: list[dict] = []
        self.events: list[str] = []

    def current_context(self) -> EditingContext:
        return self.context

    def active_prompt_history(self) -> list[str]:
        return self.prompt_history

    async def completing_read(
        self,
        label: str,
        source: CandidateSource,
        *,
        default: str | None = None,
        require_match: bool = True,
        recursive: bool = True,
    ) -> str:
        self.reads.append(
            {
                "label": label,
                "source": source,
                "default": default,
                "require_match": require_match,
                "recursive": recursive,
            }
        )
        self.events.append("read")
        if callable(self.answer):
            return self.answer(source)
        return self.answer

    def current_document(self) -> StringDocument:
        return self.prompt if self.context.in_prompt else self.buffer

    def clear_prompt(self) -> None:
        self.events.append("clear")
        self.prompt.clear()


@pytest.fixture
def make_host() -> Callable[..., FakeHost]:
    """Factory for FakeHost instances."""
    return FakeHost
