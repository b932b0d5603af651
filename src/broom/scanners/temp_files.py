"""Scanner for user-owned temp files in /tmp."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, item_for

log = logging.getLogger(__name__)

_ONE_DAY = 86400  # seconds
_TMP_DIR = Path("/tmp")


class TempFilesScanner(Scanner):
    """User-owned entries in /tmp that are older than one day."""

    category_id = "temp-files"

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        items: list[CleanableItem] = []
        uid = os.getuid()
        cutoff = time.time() - _ONE_DAY

        try:
            children = list(_TMP_DIR.iterdir())
        except OSError:
            log.debug("Cannot read %s", _TMP_DIR)
            return self._result(items)

        for child in children:
            try:
                stat = child.lstat()
                if stat.st_uid != uid or stat.st_mtime > cutoff:
                    continue
                items.append(item_for(child, stat))
            except OSError:
                log.debug("Cannot access: %s", child)

        return self._result(items)
