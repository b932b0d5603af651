"""Scanners keyed by their catalog category."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from broom.models.category import CATEGORIES, Category

if TYPE_CHECKING:
    from broom.scanners.base import Scanner

log = logging.getLogger(__name__)


class ScannerRegistry:
    """One scanner per catalog category, kept in registration order.

    Scanners for ids missing from :data:`CATEGORIES` are refused, since
    nothing could display or record their results.
    """

    def __init__(self) -> None:
        self._scanners: dict[str, Scanner] = {}

    def register(self, scanner: Scanner) -> None:
        category = CATEGORIES.get(scanner.category_id)
        if category is None:
            log.warning("No catalog category '%s', not registering %s", scanner.category_id, type(scanner).__name__)
            return
        if category.id in self._scanners:
            log.warning("Category '%s' already has a scanner, skipping %s", category.id, type(scanner).__name__)
            return
        self._scanners[category.id] = scanner
        log.debug("Registered %s for '%s'", type(scanner).__name__, category.name)

    def get(self, category_id: str) -> Scanner | None:
        return self._scanners.get(category_id)

    def get_available(self) -> list[Scanner]:
        """Scanners that can run here; a failing availability check counts as unavailable."""
        available = []
        for category_id, scanner in self._scanners.items():
            try:
                usable = scanner.is_available()
            except Exception:
                log.exception("Availability check failed for '%s'", category_id)
                continue
            if usable:
                available.append(scanner)
        return available

    def by_group(self) -> dict[str, list[Category]]:
        """Registered categories bucketed by their catalog group."""
        groups: dict[str, list[Category]] = {}
        for category_id in self._scanners:
            category = CATEGORIES[category_id]
            groups.setdefault(category.group, []).append(category)
        return groups

    def __len__(self) -> int:
        return len(self._scanners)

    def __iter__(self) -> Iterator[Scanner]:
        return iter(self._scanners.values())

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._scanners
