"""Scanner for large files in the home directory."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner

log = logging.getLogger(__name__)


class LargeFilesScanner(Scanner):
    """Regular files of at least ``min_size`` bytes under the home directory.

    Hidden directories are not descended into; they hold application
    state that the cache scanners cover.
    """

    category_id = "large-files"

    def _root(self) -> Path:
        return Path.home()

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        options = options or ScanOptions()
        items: list[CleanableItem] = []

        for dirpath, dirnames, filenames in os.walk(self._root()):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for filename in filenames:
                path = os.path.join(dirpath, filename)
                try:
                    stat = os.lstat(path)
                except OSError:
                    log.debug("Cannot stat: %s", path)
                    continue
                if not os.path.isfile(path) or os.path.islink(path):
                    continue
                if stat.st_size >= options.min_size:
                    items.append(
                        CleanableItem(
                            path=path,
                            size=stat.st_size,
                            name=filename,
                            modified_at=datetime.fromtimestamp(stat.st_mtime),
                        )
                    )

        return self._result(items)
