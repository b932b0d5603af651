"""Scanner for ~/.cache contents."""

from __future__ import annotations

from broom.models.scan_result import ScanResult
from broom.scanners.base import ScanOptions, Scanner, scan_children
from broom.utils import xdg_cache_home

# Directories commonly used by active applications that should not be cleaned
_EXCLUDE_DIRS = frozenset({
    "fontconfig",
    "icon-cache.kcache",
    "gstreamer-1.0",
    "mesa_shader_cache",
})

# Handled by the browser and development scanners
_OWNED_ELSEWHERE = frozenset({
    "mozilla",
    "chromium",
    "google-chrome",
    "BraveSoftware",
    "pip",
    "yarn",
})


class UserCacheScanner(Scanner):
    """Top-level entries of ~/.cache, excluding active and separately scanned caches."""

    category_id = "system-cache"

    @property
    def unavailable_reason(self) -> str | None:
        if not xdg_cache_home().is_dir():
            return "User cache directory not found"
        return None

    def scan(self, options: ScanOptions | None = None) -> ScanResult:
        return self._result(scan_children(xdg_cache_home(), skip=_EXCLUDE_DIRS | _OWNED_ELSEWHERE))
