"""Display truncation for directory paths and file names."""

from __future__ import annotations

from broom.utils import contract_path

ELLIPSIS = "..."
MAX_DIR_DISPLAY_LENGTH = 50


def truncate_directory_path(dir_path: str, absolute_paths: bool = False) -> str:
    """Shorten a directory path for display.

    Home-relative paths are shown with ``~`` unless *absolute_paths* is
    set.  Paths longer than :data:`MAX_DIR_DISPLAY_LENGTH` keep their
    first segment and last two segments with the middle collapsed into
    ``...``; if that is still too long the head is cut instead.
    """
    display = dir_path if absolute_paths else contract_path(dir_path)
    if len(display) <= MAX_DIR_DISPLAY_LENGTH:
        return display

    segments = display.split("/")
    if len(segments) > 3:
        collapsed = "/".join([segments[0], ELLIPSIS, *segments[-2:]])
        if len(collapsed) <= MAX_DIR_DISPLAY_LENGTH:
            return collapsed
        display = collapsed

    return ELLIPSIS + display[-(MAX_DIR_DISPLAY_LENGTH - len(ELLIPSIS)):]


def truncate_file_name(name: str, max_length: int) -> str:
    """Shorten *name* to exactly *max_length* characters, keeping its extension.

    The base name loses its middle; when the budget is odd the extra
    character goes to the prefix.  If the extension leaves no room for
    the base name the name is hard-truncated with a trailing ellipsis.

    >>> truncate_file_name("a-very-long-file-name.txt", 15)
    'a-ve...name.txt'
    """
    if len(name) <= max_length:
        return name

    dot = name.rfind(".")
    if dot > 0:
        base, ext = name[:dot], name[dot:]
    else:
        base, ext = name, ""

    available = max_length - len(ext) - len(ELLIPSIS)
    if available < 1:
        if max_length <= len(ELLIPSIS):
            return ELLIPSIS[:max_length]
        return name[: max_length - len(ELLIPSIS)] + ELLIPSIS

    head = (available + 1) // 2
    tail = available // 2
    return base[:head] + ELLIPSIS + base[len(base) - tail:] + ext
