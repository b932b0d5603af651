"""Base scanner interface."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from broom.models.category import Category, get_category
from broom.models.clean_result import CleanResult
from broom.models.scan_result import CleanableItem, ScanResult
from broom.utils import dir_info, remove_paths

log = logging.getLogger(__name__)

DEFAULT_DAYS_OLD = 30
DEFAULT_MIN_SIZE = 500 * 1024 * 1024


@dataclass(frozen=True)
class ScanOptions:
    """Tunables shared by all scanners."""

    days_old: int = DEFAULT_DAYS_OLD
    min_size: int = DEFAULT_MIN_SIZE
    verbose: bool = False


class Scanner(ABC):
    """Base class for all category scanners.

    A scanner discovers the cleanable items of exactly one category and
    knows how to remove them again.
    """

    category_id: str = ""

    @property
    def category(self) -> Category:
        return get_category(self.category_id)

    @property
    def unavailable_reason(self) -> str | None:
        """Why this scanner cannot work on this system, or None if supported."""
        return None

    def is_available(self) -> bool:
        """Check if this scanner is applicable on the current system."""
        return self.unavailable_reason is None

    @abstractmethod
    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        """Scan for cleanable items. MUST NOT delete anything."""

    def clean(self, items: list[CleanableItem], dry_run: bool = False) -> CleanResult:
        """Remove *items* and report what was freed.

        With *dry_run* nothing is touched and the result reports what
        would have been freed.
        """
        if dry_run:
            return CleanResult(
                category=self.category,
                cleaned_items=len(items),
                freed_space=sum(i.size for i in items),
            )

        freed = 0
        cleaned = 0
        errors: list[str] = []
        for item in items:
            removed, item_errors = remove_paths([Path(item.path)])
            if item_errors:
                errors.extend(item_errors)
                continue
            cleaned += removed
            if removed:
                freed += item.size

        return CleanResult(category=self.category, cleaned_items=cleaned, freed_space=freed, errors=errors)

    def _result(self, items: list[CleanableItem]) -> ScanResult:
        return ScanResult.from_items(self.category, items)


def item_for(path: Path, stat: os.stat_result | None = None) -> CleanableItem:
    """Build a CleanableItem for *path*, measuring directories recursively."""
    st = stat or path.lstat()
    is_dir = path.is_dir() and not path.is_symlink()
    size = dir_info(path)[0] if is_dir else st.st_size
    return CleanableItem(
        path=str(path),
        size=size,
        name=path.name,
        is_directory=is_dir,
        modified_at=datetime.fromtimestamp(st.st_mtime),
    )


def scan_children(directory: Path, skip: frozenset[str] = frozenset()) -> list[CleanableItem]:
    """Return one non-empty item per direct child of *directory*."""
    items: list[CleanableItem] = []
    try:
        children = sorted(directory.iterdir())
    except OSError:
        log.debug("Cannot read directory: %s", directory)
        return items

    for child in children:
        if child.name in skip:
            continue
        try:
            item = item_for(child)
        except OSError:
            log.debug("Cannot access: %s", child)
            continue
        if item.size > 0:
            items.append(item)
    return items
