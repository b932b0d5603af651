"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def _xdg_dir(variable: str, *fallback: str) -> Path:
    value = os.environ.get(variable)
    return Path(value) if value else Path.home().joinpath(*fallback)


def xdg_cache_home() -> Path:
    return _xdg_dir("XDG_CACHE_HOME", ".cache")


def xdg_config_home() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", ".config")


def xdg_data_home() -> Path:
    return _xdg_dir("XDG_DATA_HOME", ".local", "share")


def xdg_state_home() -> Path:
    return _xdg_dir("XDG_STATE_HOME", ".local", "state")


def contract_path(path: str) -> str:
    """Replace a leading home directory with ``~``."""
    home = str(Path.home())
    if path == home:
        return "~"
    if path.startswith(home + os.sep):
        return "~" + path[len(home):]
    return path


def remove_paths(paths: list[Path]) -> tuple[int, list[str]]:
    """Delete files and directory trees.

    Paths that are already gone are skipped.  Any other failure is
    recorded as ``"<path>: <reason>"`` and the rest are still attempted.

    Returns:
        (removed_count, errors) tuple.
    """
    removed = 0
    errors: list[str] = []

    for path in paths:
        if not path.is_symlink() and not path.exists():
            continue
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            errors.append(f"{path}: {e}")
            continue
        removed += 1
        log.debug("Removed %s", path)

    return removed, errors


def dir_info(path: Path | str) -> tuple[int, int]:
    """Total apparent size and number of regular files below *path*.

    Prefers GNU ``find`` for speed and walks with ``os.scandir`` where
    ``find`` is missing or fails.
    """
    try:
        return _dir_info_find(os.fspath(path))
    except (OSError, ValueError, subprocess.SubprocessError):
        log.debug("find unavailable for %s, walking in Python", path)
        return _dir_info_scandir(path)


def _dir_info_find(path: str) -> tuple[int, int]:
    proc = subprocess.run(
        ["find", path, "-type", "f", "-printf", "%s\n"],
        capture_output=True,
        timeout=60,
        check=False,
    )
    sizes = [int(line) for line in proc.stdout.splitlines() if line]
    return sum(sizes), len(sizes)


def _dir_info_scandir(path: Path | str) -> tuple[int, int]:
    total = count = 0
    pending = [os.fspath(path)]
    while pending:
        try:
            entries = list(os.scandir(pending.pop()))
        except OSError:
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
                    count += 1
            except OSError:
                continue
    return total, count


def bytes_to_human(size_bytes: int) -> str:
    """Format a byte count with binary units, e.g. ``1.5 KB``."""
    if size_bytes < 0:
        return "-" + bytes_to_human(-size_bytes)
    if size_bytes < 1024:
        return f"{size_bytes} B"

    value = float(size_bytes)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS[1:]:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"
