"""Scanner for user-owned log files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, item_for
from broom.utils import xdg_cache_home, xdg_state_home

log = logging.getLogger(__name__)


def _is_log(name: str) -> bool:
    """Match ``*.log`` files and rotated logs such as ``app.log.1`` or ``app.log.2.gz``."""
    parts = name.split(".")
    if "log" not in parts[1:]:
        return False
    tail = parts[parts.index("log", 1) + 1:]
    return all(p.isdigit() or p in ("gz", "xz", "old") for p in tail)


class LogFilesScanner(Scanner):
    """Log files below the XDG state and cache directories."""

    category_id = "system-logs"

    def _roots(self) -> tuple[Path, ...]:
        return (xdg_state_home(), xdg_cache_home())

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        items: list[CleanableItem] = []
        for root in self._roots():
            if not root.is_dir():
                continue
            for dirpath, _dirnames, filenames in os.walk(root, onerror=lambda e: log.debug("Cannot walk: %s", e)):
                for filename in filenames:
                    if not _is_log(filename):
                        continue
                    path = Path(dirpath) / filename
                    try:
                        item = item_for(path)
                    except OSError:
                        log.debug("Cannot access: %s", path)
                        continue
                    if item.size > 0:
                        items.append(item)
        return self._result(items)
