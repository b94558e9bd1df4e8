"""Tests for the insert_item command."""

from __future__ import annotations

import pytest

from histpick.config import HistPickConfig
from histpick.core import ContextKind, HistoryRing, StringDocument, insert_item


@pytest.mark.asyncio
async def test_prompt_context_clears_then_inserts_choice(make_host):
    host = make_host(ContextKind.MINIBUFFER, in_prompt=True, answer="bar")
    host.prompt_history = ["foo", "bar", "foo"]
    host.prompt = StringDocument("stale text")

    inserted = await insert_item(host, HistPickConfig())

    assert inserted == "bar"
    assert host.events == ["read", "clear"]
    assert host.prompt.text == "bar"
    assert host.reads[0]["source"].candidates == ("foo", "bar", "foo")


@pytest.mark.asyncio
async def test_prompt_context_clears_even_when_cancelled(make_host):
    host = make_host(ContextKind.MINIBUFFER, in_prompt=True, answer="")
    host.prompt = StringDocument("stale text")

    inserted = await insert_item(host, HistPickConfig())

    assert inserted == ""
    assert host.events == ["read", "clear"]
    assert host.prompt.text == ""
    assert host.reads[0]["source"].candidates == ()


@pytest.mark.asyncio
async def test_shell_buffer_inserts_at_cursor_without_clearing(make_host):
    host = make_host(ContextKind.SHELL, answer=lambda source: source.candidates[0])
    host.history_stores.bind("comint-input-ring", HistoryRing(["ls -la", "cd /tmp"]))
    host.buffer = StringDocument("$ \nolder output", cursor=2)

    inserted = await insert_item(host, HistPickConfig())

    assert inserted == "ls -la"
    assert "clear" not in host.events
    assert host.buffer.text == "$ ls -la\nolder output"
    assert host.buffer.cursor == 8


@pytest.mark.asyncio
async def test_no_history_and_no_prompt_does_nothing(make_host):
    host = make_host(ContextKind.TEXT, answer="")
    host.buffer = StringDocument("untouched")

    inserted = await insert_item(host, HistPickConfig())

    assert inserted == ""
    assert host.events == ["read"]
    assert host.buffer.text == "untouched"


@pytest.mark.asyncio
async def test_prompt_arguments(make_host):
    host = make_host(ContextKind.TEXT)

    await insert_item(host, HistPickConfig(prompt_label="Pick: "))

    read = host.reads[0]
    assert read["label"] == "Pick: "
    assert read["default"] is None
    assert read["require_match"] is True
    assert read["recursive"] is True
    assert read["source"].sort is False
    assert read["source"].cycle_sort is False


@pytest.mark.asyncio
async def test_insert_bypasses_read_only_and_restores_it(make_host):
    host = make_host(ContextKind.SHELL, answer="make")
    host.history_stores.bind("comint-input-ring", HistoryRing(["make"]))
    host.buffer = StringDocument("", read_only=True)

    await insert_item(host, HistPickConfig())

    assert host.buffer.text == "make"
    assert host.buffer.read_only is True


@pytest.mark.asyncio
async def test_completion_failure_propagates(make_host):
    def fail(source):
        raise RuntimeError("completion broke")

    host = make_host(ContextKind.MINIBUFFER, in_prompt=True, answer=fail)
    host.prompt = StringDocument("keep")

    with pytest.raises(RuntimeError, match="completion broke"):
        await insert_item(host, HistPickConfig())

    assert host.prompt.text == "keep"


@pytest.mark.asyncio
async def test_insert_failure_propagates_and_restores_protection(make_host):
    class BrokenDocument(StringDocument):
        def _insert(self, text: str) -> None:
            raise OSError("disk full")

    host = make_host(ContextKind.SHELL, answer="make")
    host.buffer = BrokenDocument(read_only=True)

    with pytest.raises(OSError, match="disk full"):
        await insert_item(host, HistPickConfig())

    assert host.buffer.read_only is True
