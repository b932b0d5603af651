"""Scanner for duplicate files in the Downloads directory."""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime
from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner
from broom.scanners.downloads import get_downloads_dir

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65_536  # 64 KB


def sha256(path: Path) -> str:
    """Compute SHA-256 of a file using chunked reads."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            h.update(chunk)
    return h.hexdigest()


class DuplicatesScanner(Scanner):
    """Files with identical content in Downloads; the oldest copy is kept."""

    category_id = "duplicates"

    @property
    def unavailable_reason(self) -> str | None:
        if get_downloads_dir() is None:
            return "Downloads directory not found"
        return None

    def _root(self) -> Path | None:
        return get_downloads_dir()

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        root = self._root()
        if root is None:
            return self._result([])

        # Group regular files by size.
        by_size: dict[int, list[Path]] = {}
        for path in sorted(root.rglob("*")):
            try:
                if path.is_file() and not path.is_symlink():
                    size = path.stat().st_size
                    if size > 0:
                        by_size.setdefault(size, []).append(path)
            except OSError:
                log.debug("Cannot stat: %s", path)

        # For same-size groups, hash and find true duplicates.
        items: list[CleanableItem] = []
        for size, paths in by_size.items():
            if len(paths) < 2:
                continue

            by_hash: dict[str, list[Path]] = {}
            for p in paths:
                try:
                    by_hash.setdefault(sha256(p), []).append(p)
                except OSError:
                    log.debug("Cannot hash: %s", p)

            for duplicates in by_hash.values():
                if len(duplicates) < 2:
                    continue
                # Keep the oldest file (lowest mtime).
                duplicates.sort(key=lambda p: p.stat().st_mtime)
                for dup in duplicates[1:]:
                    items.append(
                        CleanableItem(
                            path=str(dup),
                            size=size,
                            name=dup.name,
                            modified_at=datetime.fromtimestamp(dup.stat().st_mtime),
                        )
                    )

        return self._result(items)
