"""Freed-space history across cleaning sessions."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from broom.models.clean_result import CleanResult
from broom.storage import load_history, save_history

log = logging.getLogger(__name__)

PERIOD_DAYS = {"today": 0, "week": 7, "month": 30}


class Tracker:
    """Collects the results of one session and appends them to the history."""

    def __init__(self) -> None:
        self._pending: list[CleanResult] = []

    @property
    def session_bytes_freed(self) -> int:
        return sum(r.freed_space for r in self._pending)

    @property
    def session_items_cleaned(self) -> int:
        return sum(r.cleaned_items for r in self._pending)

    def record(self, results: Iterable[CleanResult]) -> None:
        self._pending.extend(results)

    def save_session(self) -> None:
        """Append the pending results as one session; no-op when nothing was recorded."""
        if not self._pending:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": [
                {
                    "category_id": r.category.id,
                    "bytes_freed": r.freed_space,
                    "items_cleaned": r.cleaned_items,
                    "errors": len(r.errors),
                }
                for r in self._pending
            ],
        }
        history = load_history()
        history["sessions"].append(entry)
        save_history(history)

        log.info("Recorded session: %d bytes freed, %d items", self.session_bytes_freed, self.session_items_cleaned)
        self._pending = []

    def get_stats(self, period: str = "all") -> dict[str, Any]:
        """Aggregate the history for ``today``, ``week``, ``month`` or ``all``."""
        every = load_history()["sessions"]
        cutoff = _cutoff(period)
        sessions = every if cutoff is None else [s for s in every if _timestamp(s) >= cutoff]

        per_category: dict[str, dict[str, int]] = defaultdict(lambda: {"bytes_freed": 0, "items_cleaned": 0})
        for detail in _details(sessions):
            totals = per_category[detail["category_id"]]
            totals["bytes_freed"] += detail.get("bytes_freed", 0)
            totals["items_cleaned"] += detail.get("items_cleaned", 0)

        return {
            "period": period,
            "bytes_freed": sum(d.get("bytes_freed", 0) for d in _details(sessions)),
            "items_cleaned": sum(d.get("items_cleaned", 0) for d in _details(sessions)),
            "session_count": len(sessions),
            "lifetime_bytes_freed": sum(d.get("bytes_freed", 0) for d in _details(every)),
            "per_category": dict(per_category),
        }


def _details(sessions: list[dict[str, Any]]) -> Iterable[dict[str, Any]]:
    for session in sessions:
        yield from session.get("details", [])


def _cutoff(period: str) -> datetime | None:
    days = PERIOD_DAYS.get(period)
    if days is None:
        return None
    midnight = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days)


def _timestamp(session: dict[str, Any]) -> datetime:
    try:
        return datetime.fromisoformat(session["timestamp"])
    except (KeyError, TypeError, ValueError):
        return datetime.min.replace(tzinfo=timezone.utc)
