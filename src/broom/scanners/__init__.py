"""Built-in category scanners."""

from __future__ import annotations

from broom.core.registry import ScannerRegistry
from broom.scanners.base import ScanOptions, Scanner
from broom.scanners.browser_cache import BrowserCacheScanner
from broom.scanners.dev_cache import DevCacheScanner
from broom.scanners.downloads import OldDownloadsScanner
from broom.scanners.duplicates import DuplicatesScanner
from broom.scanners.large_files import LargeFilesScanner
from broom.scanners.logs import LogFilesScanner
from broom.scanners.temp_files import TempFilesScanner
from broom.scanners.trash import TrashScanner
from broom.scanners.user_cache import UserCacheScanner

ALL_SCANNERS: tuple[type[Scanner], ...] = (
    UserCacheScanner,
    LogFilesScanner,
    TempFilesScanner,
    TrashScanner,
    OldDownloadsScanner,
    BrowserCacheScanner,
    DevCacheScanner,
    LargeFilesScanner,
    DuplicatesScanner,
)


def build_registry() -> ScannerRegistry:
    """Return a registry holding one instance of every built-in scanner."""
    registry = ScannerRegistry()
    for scanner_cls in ALL_SCANNERS:
        registry.register(scanner_cls())
    return registry


__all__ = ["ALL_SCANNERS", "ScanOptions", "Scanner", "build_registry"]
