"""Scanner for the user's trash."""

from __future__ import annotations

from pathlib import Path

from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner, scan_children
from broom.utils import xdg_data_home


class TrashScanner(Scanner):
    """Contents of the XDG trash (~/.local/share/Trash)."""

    category_id = "trash"

    def _trash_dir(self) -> Path:
        return xdg_data_home() / "Trash"

    @property
    def unavailable_reason(self) -> str | None:
        if not self._trash_dir().is_dir():
            return "Trash directory not found"
        return None

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        items: list[CleanableItem] = []
        for subdir in (self._trash_dir() / "files", self._trash_dir() / "info"):
            if subdir.is_dir():
                items.extend(scan_children(subdir))
        return self._result(items)
