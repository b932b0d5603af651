"""Shared test fixtures."""

from __future__ import annotations

import pytest

import broom.storage as storage
from broom.models.category import get_category
from broom.models.scan_result import CleanableItem, ScanResult


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect storage to a temp directory."""
    data_dir = tmp_path / "broom_data"
    data_dir.mkdir()
    history_file = data_dir / "history.json"
    monkeypatch.setattr(storage, "HISTORY_FILE", history_file)
    monkeypatch.setattr(storage, "_DATA_DIR", data_dir)
    return history_file


@pytest.fixture
def isolate_config(tmp_path, monkeypatch):
    """Point XDG config lookups at a temp directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "broom" / "config.json"


@pytest.fixture
def make_result():
    """Factory building a ScanResult from ``(path, size)`` pairs."""

    def _make(category_id: str, files: list[tuple[str, int]]) -> ScanResult:
        items = [CleanableItem(path=path, size=size) for path, size in files]
        return ScanResult.from_items(get_category(category_id), items)

    return _make


class FakeTimer:
    """Stand-in for threading.Timer that fires only when told to."""

    created: list[FakeTimer] = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


@pytest.fixture
def fake_timers():
    FakeTimer.created = []
    yield FakeTimer
    FakeTimer.created = []
