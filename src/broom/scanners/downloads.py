"""Scanner for old files in the Downloads directory."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, item_for

log = logging.getLogger(__name__)


def get_downloads_dir() -> Path | None:
    """Resolve the user's Downloads directory.

    Reads ``XDG_DOWNLOAD_DIR`` from ``~/.config/user-dirs.dirs``,
    falls back to ``~/Downloads``.  Returns *None* when the directory
    does not exist.
    """
    dirs_file = Path.home() / ".config" / "user-dirs.dirs"
    downloads = None

    if dirs_file.is_file():
        try:
            text = dirs_file.read_text()
            match = re.search(r'^XDG_DOWNLOAD_DIR="(.+)"', text, re.MULTILINE)
            if match:
                raw = match.group(1).replace("$HOME", str(Path.home()))
                downloads = Path(raw)
        except OSError:
            pass

    if downloads is None:
        downloads = Path.home() / "Downloads"

    return downloads if downloads.is_dir() else None


class OldDownloadsScanner(Scanner):
    """Entries in Downloads not modified for ``days_old`` days."""

    category_id = "downloads"

    @property
    def unavailable_reason(self) -> str | None:
        if get_downloads_dir() is None:
            return "Downloads directory not found"
        return None

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        options = options or ScanOptions()
        downloads = get_downloads_dir()
        items: list[CleanableItem] = []
        if downloads is None:
            return self._result(items)

        cutoff = time.time() - options.days_old * 86400
        try:
            children = sorted(downloads.iterdir())
        except OSError:
            log.debug("Cannot list Downloads directory: %s", downloads)
            return self._result(items)

        for child in children:
            try:
                stat = child.lstat()
                if stat.st_mtime >= cutoff:
                    continue
                items.append(item_for(child, stat))
            except OSError:
                log.debug("Cannot access: %s", child)

        return self._result(items)
