"""Scanner for package manager download caches."""

from __future__ import annotations

import logging
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, item_for
from broom.utils import xdg_cache_home

log = logging.getLogger(__name__)


def _dev_cache_dirs() -> tuple[Path, ...]:
    home = Path.home()
    return (
        xdg_cache_home() / "pip",
        xdg_cache_home() / "yarn",
        home / ".npm" / "_cacache",
        home / ".cargo" / "registry" / "cache",
    )


class DevCacheScanner(Scanner):
    """pip, yarn, npm and cargo caches; each cache directory is one item."""

    category_id = "dev-cache"

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        items: list[CleanableItem] = []
        for cache_dir in _dev_cache_dirs():
            if not cache_dir.is_dir():
                continue
            try:
                item = item_for(cache_dir)
            except OSError:
                log.debug("Cannot access: %s", cache_dir)
                continue
            if item.size > 0:
                items.append(item)
        return self._result(items)
