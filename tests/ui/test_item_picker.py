"""Tests for the item picker screen."""

from __future__ import annotations

import pytest
from textual.app import App

from histpick.core.candidates import CandidateSource, make_candidate_source
from histpick.ui.screens import ItemPickerScreen


class PickerApp(App):
    """Pushes a single picker and keeps its result."""

    def __init__(self, source: CandidateSource, **kwargs) -> None:
        super().__init__()
        self.source = source
        self.picker_kwargs = kwargs
        self.result: str | None = None

    def on_mount(self) -> None:
        screen = ItemPickerScreen("Item: ", self.source, **self.picker_kwargs)
        self.push_screen(screen, callback=self._done)

    def _done(self, result: str | None) -> None:
        self.result = result


def _history(*items: str) -> CandidateSource:
    return make_candidate_source(items)


@pytest.mark.asyncio
async def test_enter_picks_first_candidate():
    app = PickerApp(_history("ls -la", "cd /tmp"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
    assert app.result == "ls -la"


@pytest.mark.asyncio
async def test_down_moves_highlight():
    app = PickerApp(_history("ls -la", "cd /tmp"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("down", "enter")
        await pilot.pause()
    assert app.result == "cd /tmp"


@pytest.mark.asyncio
async def test_candidates_shown_in_history_order():
    app = PickerApp(_history("zebra", "apple"))
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, ItemPickerScreen)
        assert app.screen.matches == ["zebra", "apple"]


@pytest.mark.asyncio
async def test_typing_filters_candidates():
    app = PickerApp(_history("ls -la", "cd /tmp", "cat notes"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("c", "d")
        await pilot.pause()
        assert app.screen.matches == ["cd /tmp"]
        await pilot.press("enter")
        await pilot.pause()
    assert app.result == "cd /tmp"


@pytest.mark.asyncio
async def test_escape_cancels_with_empty_string():
    app = PickerApp(_history("ls -la"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
    assert app.result == ""


@pytest.mark.asyncio
async def test_empty_source_returns_empty_string():
    app = PickerApp(_history())
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
    assert app.result == ""


@pytest.mark.asyncio
async def test_require_match_keeps_prompt_open():
    app = PickerApp(_history("ls -la"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("z", "z", "z", "enter")
        await pilot.pause()
        assert isinstance(app.screen, ItemPickerScreen)
        assert app.result is None
        await pilot.press("escape")
        await pilot.pause()
    assert app.result == ""


@pytest.mark.asyncio
async def test_free_text_allowed_without_require_match():
    app = PickerApp(_history("ls -la"), require_match=False)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("z", "z", "enter")
        await pilot.pause()
    assert app.result == "zz"


@pytest.mark.asyncio
async def test_markup_like_items_are_literal():
    app = PickerApp(_history("echo [bold]hi[/bold]"))
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
    assert app.result == "echo [bold]hi[/bold]"


@pytest.mark.asyncio
async def test_earlier_choice_does_not_reorder_next_picker():
    first = PickerApp(_history("make", "ls"))
    async with first.run_test() as pilot:
        await pilot.pause()
        await pilot.press("down", "enter")
        await pilot.pause()
    assert first.result == "ls"

    second = PickerApp(CandidateSource(("make", "ls"), sort=True, cycle_sort=True))
    async with second.run_test() as pilot:
        await pilot.pause()
        assert second.screen.matches == ["make", "ls"]
