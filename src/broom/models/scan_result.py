"""Scan result dataclasses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime

from broom.models.category import Category


@dataclass(frozen=True, slots=True)
class CleanableItem:
    """Single file or directory that can be cleaned.

    ``path`` is absolute and identifies the item; the picker keys its
    selections on it.
    """

    path: str
    size: int
    name: str = ""
    is_directory: bool = False
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", os.path.basename(self.path))


@dataclass(slots=True)
class ScanResult:
    """Result of scanning one category."""

    category: Category
    items: list[CleanableItem] = field(default_factory=list)
    total_size: int = 0
    error: str = ""

    @classmethod
    def from_items(cls, category: Category, items: list[CleanableItem]) -> ScanResult:
        """Build a result whose ``total_size`` is the sum of *items*."""
        return cls(category=category, items=items, total_size=sum(i.size for i in items))
