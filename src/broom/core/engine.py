"""Scanning and cleaning orchestration engine."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Set
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from broom.core.registry import ScannerRegistry
from broom.models.clean_result import CleanResult, CleanSummary
from broom.models.scan_result import CleanableItem, ScanResult
from broom.scanners.base import ScanOptions, Scanner

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (category_id, status)
Selection = list[tuple[str, list[CleanableItem]]]


class BroomEngine:
    """Orchestrates scanning and cleaning across scanners."""

    def __init__(self, registry: ScannerRegistry) -> None:
        self.registry = registry

    def scan(
        self,
        category_ids: list[str] | None = None,
        options: ScanOptions | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[ScanResult]:
        """Scan for cleanable items.

        Uses a small thread pool (4 workers) so slow directory walks can
        overlap.  Falls back to sequential scanning on single-core
        machines where threading adds overhead.

        Args:
            category_ids: Specific categories to scan. If None, scan all available.
            options: Scanner tunables.
            on_progress: Optional callback for progress updates.

        Returns:
            Scan results in registry order; scanners that fail are skipped.
        """
        scanners = self._resolve_scanners(category_ids)
        if not scanners:
            return []

        options = options or ScanOptions()

        def _scan(scanner: Scanner) -> ScanResult | None:
            if on_progress:
                on_progress(scanner.category_id, "scanning")
            try:
                result = scanner.scan(options)
            except Exception:
                log.exception("Scanner '%s' failed during scan", scanner.category_id)
                if on_progress:
                    on_progress(scanner.category_id, "error")
                return None
            if on_progress:
                on_progress(scanner.category_id, "done")
            return result

        if (os.cpu_count() or 1) > 1 and len(scanners) > 1:
            with ThreadPoolExecutor(max_workers=min(4, len(scanners))) as executor:
                outcomes = list(executor.map(_scan, scanners))
        else:
            outcomes = [_scan(scanner) for scanner in scanners]

        return [r for r in outcomes if r is not None]

    def clean(
        self,
        selection: Selection,
        dry_run: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> CleanSummary:
        """Clean the given items category by category.

        Args:
            selection: ``(category_id, items)`` pairs, usually from
                :func:`resolve_selection`.
            dry_run: Report what would be freed without deleting.
            on_progress: Optional callback for progress updates.
        """
        summary = CleanSummary()

        for category_id, items in selection:
            scanner = self.registry.get(category_id)
            if scanner is None:
                log.warning("Scanner for '%s' not found, skipping", category_id)
                continue

            if on_progress:
                on_progress(category_id, "cleaning")
            try:
                result = scanner.clean(items, dry_run=dry_run)
            except Exception:
                log.exception("Scanner '%s' failed during clean", category_id)
                result = CleanResult(category=scanner.category, errors=["Scanner crashed during cleaning"])
                if on_progress:
                    on_progress(category_id, "error")
            else:
                if on_progress:
                    on_progress(category_id, "done")
            summary.add(result)

        return summary

    def _resolve_scanners(self, category_ids: list[str] | None) -> list[Scanner]:
        """Resolve which scanners to operate on."""
        if not category_ids:
            return self.registry.get_available()

        result: list[Scanner] = []
        for cid in category_ids:
            scanner = self.registry.get(cid)
            if scanner is None:
                log.warning("Scanner for '%s' not found, skipping", cid)
            elif not scanner.is_available():
                log.info("Scanner for '%s' not available on this system, skipping", cid)
            else:
                result.append(scanner)
        return result


def resolve_selection(
    results: list[ScanResult],
    selected_categories: Set[str],
    selected_files_by_category: Mapping[str, Set[str]],
    file_selection_ids: Set[str],
) -> Selection:
    """Turn a picker outcome into the items to clean per category.

    Categories in file-selection mode contribute only their selected
    files and are skipped when none are selected; every other selected
    category contributes all of its scanned items.
    """
    selection: Selection = []
    for result in results:
        category_id = result.category.id
        if category_id not in selected_categories:
            continue

        if category_id in file_selection_ids:
            chosen = selected_files_by_category.get(category_id, set())
            items = [i for i in result.items if i.path in chosen]
            if items:
                selection.append((category_id, items))
        else:
            selection.append((category_id, list(result.items)))
    return selection
