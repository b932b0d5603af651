"""Cleaning history persisted as JSON under the XDG data directory."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from broom.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "broom"

HISTORY_FILE = _DATA_DIR / "history.json"

# Oldest sessions are dropped beyond this many
MAX_SESSIONS = 1000


def _empty() -> dict[str, Any]:
    return {"sessions": []}


def load_history() -> dict[str, Any]:
    """Read the history file.

    A missing, unreadable or malformed file yields an empty history;
    problems are logged, never raised.
    """
    try:
        raw = HISTORY_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return _empty()
    except OSError as e:
        log.warning("Cannot read history %s: %s", HISTORY_FILE, e)
        return _empty()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        log.warning("Ignoring corrupt history %s: %s", HISTORY_FILE, e)
        return _empty()

    if not isinstance(data, dict) or not isinstance(data.get("sessions"), list):
        log.warning("Ignoring history %s: unexpected layout", HISTORY_FILE)
        return _empty()
    return data


def save_history(data: dict[str, Any]) -> None:
    """Write *data* atomically, keeping at most :data:`MAX_SESSIONS` sessions."""
    sessions = data.get("sessions", [])
    if len(sessions) > MAX_SESSIONS:
        data = {**data, "sessions": sessions[-MAX_SESSIONS:]}

    tmp = HISTORY_FILE.with_suffix(".json.tmp")
    try:
        _DATA_DIR.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, HISTORY_FILE)
    except OSError:
        log.exception("Failed to save history file: %s", HISTORY_FILE)
