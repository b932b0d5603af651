"""Directory grouping and pagination of a category's items.

Turns the flat item list of one scan result into the rows shown in the
file pane:

    ~/Downloads (12)            directory-header
      large.zip                 file
      ...
      +7 files                  expand-hint
    ~/Documents (1)             directory-header
      report.pdf                file

Directories are ordered by their largest file so hotspots come first;
files inside a directory are ordered by size.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Literal

from broom.models.scan_result import CleanableItem
from broom.picker.paths import truncate_directory_path

DEFAULT_DIR_LIMIT = 5

RowKind = Literal["directory-header", "file", "expand-hint"]


@dataclass(frozen=True)
class DirectoryGroup:
    """Files sharing one parent directory, largest first."""

    path: str
    files: tuple[CleanableItem, ...]

    @property
    def largest_size(self) -> int:
        return self.files[0].size if self.files else 0


@dataclass(frozen=True)
class LimitedGroup:
    """A directory group with its visibility budget applied."""

    group: DirectoryGroup
    visible_count: int
    has_more: bool

    @property
    def hidden_count(self) -> int:
        return len(self.group.files) - self.visible_count


@dataclass(frozen=True)
class DisplayRow:
    """One line of the file pane.

    ``directory`` is the full parent directory path for every kind of
    row; it is what directory-scoped commands key on.
    """

    kind: RowKind
    directory: str
    total_in_dir: int
    display_name: str = ""
    item: CleanableItem | None = None
    hidden_count: int = 0

    @property
    def selectable(self) -> bool:
        return self.kind == "file"


def parent_directory(path: str) -> str:
    return os.path.dirname(path)


def group_by_directory(items: Iterable[CleanableItem]) -> list[DirectoryGroup]:
    """Group items by parent directory, sorting files and directories by size."""
    by_dir: dict[str, list[CleanableItem]] = {}
    for item in items:
        by_dir.setdefault(parent_directory(item.path), []).append(item)

    groups = [
        DirectoryGroup(path=path, files=tuple(sorted(files, key=lambda i: i.size, reverse=True)))
        for path, files in by_dir.items()
    ]
    groups.sort(key=lambda g: g.largest_size, reverse=True)
    return groups


def apply_expand_limits(
    groups: list[DirectoryGroup],
    limits: Mapping[str, int],
    default_limit: int = DEFAULT_DIR_LIMIT,
) -> list[LimitedGroup]:
    """Decide how many files of each directory are visible."""
    limited = []
    for group in groups:
        limit = limits.get(group.path, default_limit)
        limited.append(
            LimitedGroup(
                group=group,
                visible_count=min(limit, len(group.files)),
                has_more=len(group.files) > limit,
            )
        )
    return limited


def format_as_display_rows(limited_groups: list[LimitedGroup], absolute_paths: bool = False) -> list[DisplayRow]:
    """Flatten limited groups into header, file and expand-hint rows."""
    rows: list[DisplayRow] = []

    for limited in limited_groups:
        group = limited.group
        total = len(group.files)
        rows.append(
            DisplayRow(
                kind="directory-header",
                directory=group.path,
                total_in_dir=total,
                display_name=truncate_directory_path(group.path, absolute_paths),
            )
        )
        for item in group.files[: limited.visible_count]:
            rows.append(
                DisplayRow(
                    kind="file",
                    directory=group.path,
                    total_in_dir=total,
                    display_name=os.path.basename(item.path),
                    item=item,
                )
            )
        if limited.has_more:
            rows.append(
                DisplayRow(
                    kind="expand-hint",
                    directory=group.path,
                    total_in_dir=total,
                    hidden_count=limited.hidden_count,
                )
            )

    return rows


def group_files_by_directory(
    items: Iterable[CleanableItem],
    absolute_paths: bool = False,
    dir_expand_limits: Mapping[str, int] | None = None,
    default_limit: int = DEFAULT_DIR_LIMIT,
) -> list[DisplayRow]:
    """Group, paginate and format *items* into file-pane rows."""
    return format_as_display_rows(
        apply_expand_limits(group_by_directory(items), dir_expand_limits or {}, default_limit),
        absolute_paths,
    )
