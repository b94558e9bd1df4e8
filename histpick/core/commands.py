"""The insert-from-history command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .candidates import make_candidate_source
from .resolver import resolve_history

if TYPE_CHECKING:
    from ..config import HistPickConfig
    from .protocols import HostProtocol

INSERT_ITEM_COMMAND = "insert_item"


async def insert_item(host: HostProtocol, config: HistPickConfig) -> str:
    """Prompt for a history item and insert it at the cursor.

    Inside a prompt, the prompt's current input is cleared even when the
    user cancels. Returns the inserted text, or "" when nothing was inserted.
    """
    in_prompt = host.current_context().in_prompt
    source = make_candidate_source(resolve_history(host, config))

    choice = await host.completing_read(
        config.prompt_label,
        source,
        default=None,
        require_match=True,
        recursive=True,
    )

    if in_prompt:
        host.clear_prompt()

    if not choice:
        return ""

    with host.current_document().privileged() as document:
        document.insert(choice)
    return choice
