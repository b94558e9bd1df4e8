"""Feature load notifications and context creation hooks."""

from __future__ import annotations

from collections.abc import Callable, Iterable

Callback = Callable[[], None]


def _run_all(callbacks: Iterable[Callback]) -> None:
    """Run every callback, then re-raise the first failure, if any."""
    first_error: Exception | None = None
    for callback in callbacks:
        try:
            callback()
        except Exception as exc:
            if first_error is None:
                first_error = exc
    if first_error is not None:
        raise first_error


class FeatureRegistry:
    """Tracks which features are loaded and who wants to hear about it.

    notify_on_load() runs the callback right away for a feature that is
    already loaded, otherwise it queues the callback until provide() is
    called for that feature. Hooks run every time run_hooks() is called.

    Hosts without load callbacks set supports_load_callbacks to False;
    installers then fall back to creation hooks.
    """

    def __init__(self, supports_load_callbacks: bool = True) -> None:
        self.supports_load_callbacks = supports_load_callbacks
        self._loaded: set[str] = set()
        self._pending: dict[str, list[Callback]] = {}
        self._hooks: dict[str, list[Callback]] = {}

    def is_loaded(self, feature: str) -> bool:
        return feature in self._loaded

    def notify_on_load(self, feature: str, callback: Callback) -> None:
        """Run callback once feature is loaded.

        Args:
            feature: Name of the feature to wait for.
            callback: Zero-argument action. Runs immediately when the
                feature is already loaded.
        """
        if feature in self._loaded:
            callback()
            return
        self._pending.setdefault(feature, []).append(callback)

    def provide(self, feature: str) -> None:
        """Mark feature as loaded and run its queued callbacks once.

        Every queued callback runs even when an earlier one fails.

        Args:
            feature: Name of the feature that finished loading.

        Raises:
            Exception: The first error raised by a callback, after all of
                them have run.
        """
        if feature in self._loaded:
            return
        self._loaded.add(feature)
        _run_all(self._pending.pop(feature, []))

    def pending(self, feature: str) -> int:
        """Number of callbacks still waiting for feature."""
        return len(self._pending.get(feature, []))

    def add_hook(self, hook: str, callback: Callback) -> None:
        """Attach callback to a creation hook. Adding the same callback twice is a no-op.

        Args:
            hook: Hook name, e.g. "eshell-mode-hook".
            callback: Zero-argument action run on every run_hooks(hook).
        """
        callbacks = self._hooks.setdefault(hook, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def run_hooks(self, hook: str) -> None:
        """Run every callback attached to hook.

        Raises:
            Exception: The first error raised by a callback, after all of
                them have run.
        """
        _run_all(list(self._hooks.get(hook, [])))
