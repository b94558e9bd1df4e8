"""JSON settings store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .config import SETTINGS_PATH


class SettingsStore:
    """Reads and writes the settings file. Missing or empty file means {}."""

    _instance: SettingsStore | None = None

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SETTINGS_PATH

    @classmethod
    def get_instance(cls) -> SettingsStore:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load_all(self) -> dict:
        """Load the whole settings object.

        Raises:
            ValueError: If the file exists but is not a JSON object.
        """
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError(f"Settings file {self.path} must contain a JSON object.")
        return payload

    def save_all(self, settings: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self.load_all().get(key, default)
