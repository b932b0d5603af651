"""Scanner for web browser caches."""

from __future__ import annotations

from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, scan_children
from broom.utils import xdg_cache_home


def _browser_cache_dirs() -> tuple[Path, ...]:
    cache = xdg_cache_home()
    return (
        cache / "google-chrome",
        cache / "chromium",
        cache / "BraveSoftware",
        cache / "mozilla" / "firefox",
    )


class BrowserCacheScanner(Scanner):
    """Per-profile cache directories of Chromium-family browsers and Firefox."""

    category_id = "browser-cache"

    @property
    def unavailable_reason(self) -> str | None:
        if not any(d.is_dir() for d in _browser_cache_dirs()):
            return "No browser cache found"
        return None

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        items: list[CleanableItem] = []
        for cache_dir in _browser_cache_dirs():
            if cache_dir.is_dir():
                items.extend(scan_children(cache_dir))
        return self._result(items)
