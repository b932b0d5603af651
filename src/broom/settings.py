"""JSON-backed configuration store."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from broom.scanners.base import DEFAULT_DAYS_OLD, DEFAULT_MIN_SIZE, ScanOptions
from broom.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "broom"
_SETTINGS_FILE = "config.json"

DEFAULTS: dict[str, Any] = {
    "scan": {
        "days_old": DEFAULT_DAYS_OLD,
        "min_size": DEFAULT_MIN_SIZE,
    },
    "picker": {
        "absolute_paths": False,
        "file_selection": [],
    },
    "clean": {
        "include_risky": False,
    },
}


def default_path() -> Path:
    return xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE


class Settings:
    """Persistent settings backed by a JSON file.

    Uses dot-notation keys for nested access; keys missing from the file
    fall back to :data:`DEFAULTS`:
        settings.get("scan.days_old")  # reads data["scan"]["days_old"]
        settings.set("picker.absolute_paths", True)  # writes + saves
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_path()
        self._data: dict[str, Any] = {}
        self._load()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        for source in (self._data, DEFAULTS):
            found, value = _lookup(source, key)
            if found:
                return value
        return default

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key and persist to disk."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self.save()

    def as_dict(self) -> dict[str, Any]:
        """Return the effective configuration (defaults overlaid by the file)."""
        return _merge(copy.deepcopy(DEFAULTS), self._data)

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            days_old=int(self.get("scan.days_old")),
            min_size=int(self.get("scan.min_size")),
        )

    def exists(self) -> bool:
        return self.path.exists()

    def init(self) -> Path:
        """Write the defaults to disk, keeping any values already set."""
        self._data = self.as_dict()
        self.save()
        return self.path

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self.path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self.path)
            return
        self._data = data

    def save(self) -> None:
        """Persist settings to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(self._data, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.path, e)


def _lookup(data: dict[str, Any], key: str) -> tuple[bool, Any]:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base
