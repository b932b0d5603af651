"""Tests for the tracker module."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from broom.core.tracker import Tracker
from broom.models.category import get_category
from broom.models.clean_result import CleanResult

pytestmark = pytest.mark.usefixtures("isolate_storage")


def _result(category_id: str, freed: int, items: int) -> CleanResult:
    return CleanResult(category=get_category(category_id), freed_space=freed, cleaned_items=items)


class TestTracker:
    def test_session_tracking(self):
        tracker = Tracker()
        tracker.record([_result("system-cache", 1024, 5), _result("trash", 2048, 10)])

        assert tracker.session_bytes_freed == 1024 + 2048
        assert tracker.session_items_cleaned == 15

    def test_save_session(self, isolate_storage):
        tracker = Tracker()
        tracker.record([_result("trash", 5000, 3)])
        tracker.save_session()

        history = json.loads(isolate_storage.read_text())
        assert len(history["sessions"]) == 1
        detail = history["sessions"][0]["details"][0]
        assert detail == {"category_id": "trash", "bytes_freed": 5000, "items_cleaned": 3, "errors": 0}

    def test_session_results_cleared_after_save(self, isolate_storage):
        tracker = Tracker()
        tracker.record([_result("dev-cache", 24_000, 3300)])
        tracker.save_session()
        tracker.record([_result("browser-cache", 1_000, 50)])
        tracker.save_session()

        history = json.loads(isolate_storage.read_text())
        assert len(history["sessions"]) == 2
        assert history["sessions"][1]["details"][0]["bytes_freed"] == 1_000
        assert tracker.get_stats("all")["lifetime_bytes_freed"] == 25_000

    def test_empty_session_not_saved(self, isolate_storage):
        tracker = Tracker()
        tracker.save_session()
        assert not isolate_storage.exists()

    def test_corrupt_history_is_treated_as_empty(self, isolate_storage):
        isolate_storage.write_text("{not json")
        stats = Tracker().get_stats("all")
        assert stats["session_count"] == 0


class TestTrackerStats:
    def test_per_category_aggregation(self):
        t1 = Tracker()
        t1.record([_result("system-cache", 100, 5), _result("trash", 200, 3)])
        t1.save_session()

        t2 = Tracker()
        t2.record([_result("system-cache", 150, 8)])
        t2.save_session()

        stats = t2.get_stats("all")
        assert stats["per_category"]["system-cache"] == {"bytes_freed": 250, "items_cleaned": 13}
        assert stats["per_category"]["trash"]["bytes_freed"] == 200
        assert stats["session_count"] == 2

    def test_period_filters_old_sessions(self, isolate_storage):
        old = (datetime.now(timezone.utc) - timedelta(days=60)).isoformat()
        isolate_storage.write_text(json.dumps({
            "sessions": [
                {"timestamp": old, "details": [{"category_id": "trash", "bytes_freed": 500, "items_cleaned": 1}]},
            ],
        }))
        tracker = Tracker()
        tracker.record([_result("trash", 100, 1)])
        tracker.save_session()

        week = tracker.get_stats("week")
        assert week["bytes_freed"] == 100
        assert week["session_count"] == 1
        assert week["lifetime_bytes_freed"] == 600
