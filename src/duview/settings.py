"""JSON-backed settings store (read-only)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from duview.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "duview"
_SETTINGS_FILE = "settings.json"

DEFAULT_SPINNER_INTERVAL_MS = 200


class Settings:
    """Settings loaded from a JSON file.

    Uses dot-notation keys for nested access:
        settings.get("scan.recency_minutes")  # reads data["scan"]["recency_minutes"]

    Nothing is ever written back; a missing or broken file just means
    every key takes its default.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    # -- Typed accessors --

    def recency_minutes(self) -> int:
        """Default recency filter used when none is given on the command line."""
        value = self.get("scan.recency_minutes", 0)
        if isinstance(value, bool) or not isinstance(value, int):
            log.warning("Ignoring invalid scan.recency_minutes: %r", value)
            return 0
        return value

    def spinner_interval(self) -> float:
        """Busy spinner redraw period in seconds."""
        value = self.get("ui.spinner_interval_ms", DEFAULT_SPINNER_INTERVAL_MS)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            log.warning("Ignoring invalid ui.spinner_interval_ms: %r", value)
            value = DEFAULT_SPINNER_INTERVAL_MS
        return value / 1000

    def confirm_deletes(self) -> bool:
        """Whether deleting files asks for confirmation first."""
        return bool(self.get("delete.confirm", True))

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: top level is not an object", self._path)
            return
        self._data = data
