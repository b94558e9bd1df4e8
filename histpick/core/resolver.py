"""Pick the history sequence that matches the current editing context."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import HistPickConfig
    from .protocols import HostProtocol


def resolve_history(host: HostProtocol, config: HistPickConfig) -> list[str]:
    """Return the relevant history, newest first.

    Rules are checked in order and the first match wins:
    1. right after repeat_complex_command: the complex command history
    2. inside a prompt: the prompt's currently active history list
    3. the first configured ring whose kind matches and whose store is bound
    4. otherwise nothing
    """
    context = host.current_context()

    if context.after_repeat_complex_command:
        return host.command_history.as_strings()

    if context.in_prompt:
        # Each prompt can carry its own history, so always ask the host
        return list(host.active_prompt_history())

    for binding in config.input_rings:
        if binding.kind != context.kind:
            continue
        if not host.history_stores.is_bound(binding.store):
            continue
        return host.history_stores.items(binding.store)

    return []
