"""Selection state shared by the category and file panes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PickerResult:
    """What the user confirmed: selected categories and, for categories in
    file-selection mode, the selected file paths."""

    selected_categories: frozenset[str] = frozenset()
    selected_files_by_category: dict[str, frozenset[str]] = field(default_factory=dict)


class SelectionState:
    """Selected categories plus per-category selected file paths.

    For categories in file-selection mode the two are kept consistent:
    a non-empty file set puts the category in ``selected_categories``
    and an empty one takes it out.  Directory toggles are the one
    exception and leave category membership alone.  Empty file sets are
    never stored.
    """

    def __init__(self, file_selection_ids: Iterable[str] = ()) -> None:
        self.file_selection_ids = frozenset(file_selection_ids)
        self.selected_categories: set[str] = set()
        self.selected_files_by_category: dict[str, set[str]] = {}

    def supports_files(self, category_id: str) -> bool:
        return category_id in self.file_selection_ids

    def is_selected(self, category_id: str) -> bool:
        return category_id in self.selected_categories

    def selected_files(self, category_id: str) -> frozenset[str]:
        return frozenset(self.selected_files_by_category.get(category_id, ()))

    # -- Category level --

    def select_category(self, category_id: str, all_paths: Iterable[str] = ()) -> None:
        """Select a category; in file-selection mode all of *all_paths* come with it."""
        self.selected_categories.add(category_id)
        if self.supports_files(category_id):
            self._store_files(category_id, set(all_paths))

    def deselect_category(self, category_id: str) -> None:
        """Deselect a category and drop all of its file selections."""
        self.selected_categories.discard(category_id)
        self.selected_files_by_category.pop(category_id, None)

    def clear(self) -> None:
        self.selected_categories.clear()
        self.selected_files_by_category.clear()

    # -- File level --

    def toggle_file(self, category_id: str, path: str) -> None:
        files = set(self.selected_files(category_id))
        files.symmetric_difference_update({path})
        self._set_files(category_id, files)

    def toggle_all_files(self, category_id: str, all_paths: Iterable[str]) -> None:
        """Select every path, or clear them all if every one is already selected."""
        paths = set(all_paths)
        files = set(self.selected_files(category_id))
        if paths <= files:
            files -= paths
        else:
            files |= paths
        self._set_files(category_id, files)

    def invert_files(self, category_id: str, all_paths: Iterable[str]) -> None:
        files = set(self.selected_files(category_id))
        files.symmetric_difference_update(all_paths)
        self._set_files(category_id, files)

    def toggle_directory(self, category_id: str, dir_paths: Iterable[str]) -> None:
        """Select or clear all files of one directory.

        Unlike the other file toggles this never adds or removes the
        category itself.
        """
        paths = set(dir_paths)
        files = set(self.selected_files(category_id))
        if paths <= files:
            files -= paths
        else:
            files |= paths
        self._store_files(category_id, files)

    def result(self) -> PickerResult:
        return PickerResult(
            selected_categories=frozenset(self.selected_categories),
            selected_files_by_category={
                cid: frozenset(paths) for cid, paths in self.selected_files_by_category.items()
            },
        )

    def _set_files(self, category_id: str, files: set[str]) -> None:
        self._store_files(category_id, files)
        if files:
            self.selected_categories.add(category_id)
        else:
            self.selected_categories.discard(category_id)

    def _store_files(self, category_id: str, files: set[str]) -> None:
        if files:
            self.selected_files_by_category[category_id] = files
        else:
            self.selected_files_by_category.pop(category_id, None)
