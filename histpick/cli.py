#!/usr/bin/env python3
"""histpick - insert previous input from history through a completion prompt."""

from __future__ import annotations

import argparse
from pathlib import Path

from .core.context import ContextKind


def main() -> int:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="histpick",
        description="Editor buffer with insert-from-history completion",
    )
    parser.add_argument(
        "--mode",
        choices=[kind.value for kind in ContextKind if kind is not ContextKind.MINIBUFFER],
        default=ContextKind.SHELL.value,
        help="Initial buffer mode (default: shell)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Settings JSON file to read instead of ~/.histpick/settings.json",
    )
    parser.add_argument(
        "--legacy-hooks",
        action="store_true",
        help="Install bindings from mode hooks instead of feature load callbacks",
    )
    args = parser.parse_args()

    from .core.config_manager import ConfigManager
    from .settings import SettingsStore
    from .ui.app import HistPickApp

    store = SettingsStore(args.config) if args.config else None
    config = ConfigManager(settings_store=store).initialize()

    app = HistPickApp(
        config,
        buffer_kind=ContextKind.from_name(args.mode),
        legacy_hooks=args.legacy_hooks,
    )
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
