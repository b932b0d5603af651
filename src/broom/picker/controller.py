"""Two-pane category/file picker state machine.

The category pane lists scan results; categories in file-selection mode
can be entered to pick individual files, grouped by directory.  Keys are
fed to :meth:`FilePicker.handle_key` one at a time and every transition
completes before the next key is read.  Rendering lives in
:mod:`broom.picker.render`; the terminal loop in :mod:`broom.picker.session`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Callable, Literal

from broom.models.scan_result import ScanResult
from broom.picker.clipboard import ClipboardError, copy_to_clipboard
from broom.picker.grouping import DEFAULT_DIR_LIMIT, DisplayRow, group_files_by_directory, parent_directory
from broom.picker.keys import Key
from broom.picker.selection import PickerResult, SelectionState
from broom.picker.status import StatusLine
from broom.picker.ui_state import UIStateStore

log = logging.getLogger(__name__)

Pane = Literal["categories", "files"]

EXPAND_INCREMENT = 10
COPY_STATUS_SECONDS = 2.0
COPY_FAILED_STATUS_SECONDS = 3.0


def _run_in_thread(task: Callable[[], None]) -> None:
    threading.Thread(target=task, name="broom-clipboard", daemon=True).start()


class FilePicker:
    """Selection engine and pane controller for one picker session."""

    def __init__(
        self,
        results: list[ScanResult],
        file_selection_ids: Iterable[str] = (),
        absolute_paths: bool = False,
        *,
        default_dir_limit: int = DEFAULT_DIR_LIMIT,
        status: StatusLine | None = None,
        clipboard: Callable[[str], None] = copy_to_clipboard,
        run_async: Callable[[Callable[[], None]], None] = _run_in_thread,
    ) -> None:
        if not results:
            raise ValueError("FilePicker needs at least one scan result")

        self.results = results
        self.absolute_paths = absolute_paths
        self.default_dir_limit = default_dir_limit
        self.selection = SelectionState(file_selection_ids)
        self.ui = UIStateStore()
        self.status = status or StatusLine()
        self.pane: Pane = "categories"
        self.category_caret = 0
        self._clipboard = clipboard
        self._run_async = run_async
        self._copy_generation = 0
        self._closed = False
        self._rows_cache: dict[str, tuple[frozenset[tuple[str, int]], list[DisplayRow]]] = {}
        self._results_by_id = {r.category.id: r for r in results}
        # Held by every state transition and by redraws from other threads.
        self.lock = threading.RLock()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """End the session: late clipboard results and status timers are dropped."""
        with self.lock:
            self._closed = True
            self._copy_generation += 1
            self.status.clear()

    # -- Queries --

    @property
    def current_result(self) -> ScanResult:
        return self.results[self.category_caret]

    @property
    def active_category(self) -> str | None:
        return self.ui.active_category()

    def supports_files(self, category_id: str) -> bool:
        return self.selection.supports_files(category_id)

    def rows_for(self, category_id: str) -> list[DisplayRow]:
        """Display rows of a category under its current expand limits."""
        if not self.supports_files(category_id):
            return []
        limits = self.ui.get(category_id).dir_expand_limits
        key = frozenset(limits.items())
        cached = self._rows_cache.get(category_id)
        if cached is not None and cached[0] == key:
            return cached[1]
        rows = group_files_by_directory(
            self._results_by_id[category_id].items,
            self.absolute_paths,
            limits,
            self.default_dir_limit,
        )
        self._rows_cache[category_id] = (key, rows)
        return rows

    def can_enter_files(self, category_id: str) -> bool:
        return self.supports_files(category_id) and bool(self.rows_for(category_id))

    def shows_files_inline(self, category_id: str) -> bool:
        state = self.ui.get(category_id)
        return (self.selection.is_selected(category_id) and state.visible) or state.active

    def result(self) -> PickerResult:
        return self.selection.result()

    # -- Dispatch --

    def handle_key(self, key: Key) -> PickerResult | None:
        """Apply one keypress; returns the final result when the user confirms."""
        with self.lock:
            if key is Key.ENTER:
                self._copy_generation += 1
                self.status.cancel()
                return self.result()

            if self.pane == "categories":
                self._handle_category_key(key)
            else:
                self._handle_file_key(key)
            return None

    def _handle_category_key(self, key: Key) -> None:
        match key:
            case Key.UP:
                self.category_caret = max(0, self.category_caret - 1)
            case Key.DOWN:
                self.category_caret = min(len(self.results) - 1, self.category_caret + 1)
            case Key.SPACE:
                self._toggle_category(self.current_result)
            case Key.SELECT_ALL:
                self._toggle_all_categories()
            case Key.INVERT:
                self._invert_categories()
            case Key.RIGHT:
                self._enter_files()

    def _handle_file_key(self, key: Key) -> None:
        category_id = self.active_category
        if category_id is None:
            self.pane = "categories"
            return

        match key:
            case Key.UP:
                self._move_file_caret(category_id, -1)
            case Key.DOWN:
                self._move_file_caret(category_id, 1)
            case Key.SPACE:
                row = self._caret_row(category_id)
                if row is not None and row.selectable and row.item is not None:
                    self.selection.toggle_file(category_id, row.item.path)
            case Key.SELECT_ALL:
                self.selection.toggle_all_files(category_id, self._all_paths(category_id))
            case Key.INVERT:
                self.selection.invert_files(category_id, self._all_paths(category_id))
            case Key.TOGGLE_DIRECTORY:
                self._toggle_directory(category_id)
            case Key.EXPAND:
                self._expand_directory(category_id)
            case Key.COLLAPSE:
                self._collapse_directory(category_id)
            case Key.RIGHT:
                row = self._caret_row(category_id)
                if row is not None and row.kind == "expand-hint":
                    self._expand_directory(category_id)
            case Key.LEFT | Key.BACKSPACE:
                self.ui.activate(None)
                self.pane = "categories"
                return
            case Key.COPY_PATH:
                self._copy_directory_path(category_id)
        self._sync_caret(category_id)

    # -- Category pane --

    def _toggle_category(self, result: ScanResult) -> None:
        category_id = result.category.id
        if self.selection.is_selected(category_id):
            self.selection.deselect_category(category_id)
            if self.supports_files(category_id):
                self.ui.update(category_id, visible=False)
        else:
            self._select_with_files(result)

    def _toggle_all_categories(self) -> None:
        if all(self.selection.is_selected(r.category.id) for r in self.results):
            self.selection.clear()
            self.ui.clear()
            return
        for result in self.results:
            self._select_with_files(result)

    def _invert_categories(self) -> None:
        for result in self.results:
            category_id = result.category.id
            if self.selection.is_selected(category_id):
                self.selection.deselect_category(category_id)
                if self.supports_files(category_id):
                    self.ui.update(category_id, visible=False)
            else:
                self._select_with_files(result)

    def _select_with_files(self, result: ScanResult) -> None:
        category_id = result.category.id
        self.selection.select_category(category_id, (item.path for item in result.items))
        if self.supports_files(category_id):
            self.ui.update(category_id, visible=True)

    def _enter_files(self) -> None:
        category_id = self.current_result.category.id
        if not self.can_enter_files(category_id):
            return

        rows = self.rows_for(category_id)
        caret = self.ui.get(category_id).file_caret
        if not (0 <= caret < len(rows) and rows[caret].selectable):
            caret = next((i for i, row in enumerate(rows) if row.selectable), 0)

        self.ui.activate(category_id)
        self.ui.update(category_id, file_caret=caret)
        self.pane = "files"

    # -- File pane --

    def _all_paths(self, category_id: str) -> list[str]:
        return [item.path for item in self._results_by_id[category_id].items]

    def _caret_row(self, category_id: str) -> DisplayRow | None:
        rows = self.rows_for(category_id)
        caret = self.ui.get(category_id).file_caret
        return rows[caret] if 0 <= caret < len(rows) else None

    def _move_file_caret(self, category_id: str, step: int) -> None:
        rows = self.rows_for(category_id)
        caret = self.ui.get(category_id).file_caret + step
        while 0 <= caret < len(rows) and not rows[caret].selectable:
            caret += step
        if 0 <= caret < len(rows):
            self.ui.update(category_id, file_caret=caret)

    def _sync_caret(self, category_id: str) -> None:
        """Move the caret to the nearest selectable row if it left one.

        A caret that ends up on an expand hint, as after collapsing the
        directory it was in, stays there so → can reopen it.
        """
        rows = self.rows_for(category_id)
        if not rows:
            return
        caret = self.ui.get(category_id).file_caret
        clamped = max(0, min(caret, len(rows) - 1))
        if rows[clamped].kind == "expand-hint":
            fixed = clamped
        else:
            fixed = nearest_selectable(rows, clamped)
        if fixed != caret:
            self.ui.update(category_id, file_caret=fixed)

    def _toggle_directory(self, category_id: str) -> None:
        row = self._caret_row(category_id)
        if row is None or not row.selectable:
            return
        dir_paths = [p for p in self._all_paths(category_id) if parent_directory(p) == row.directory]
        self.selection.toggle_directory(category_id, dir_paths)

    def _expand_directory(self, category_id: str) -> None:
        row = self._caret_row(category_id)
        if row is None:
            return
        limits = self.ui.get(category_id).dir_expand_limits
        current = limits.get(row.directory, self.default_dir_limit)
        self.ui.update(category_id, dir_expand_limits={**limits, row.directory: current + EXPAND_INCREMENT})

    def _collapse_directory(self, category_id: str) -> None:
        row = self._caret_row(category_id)
        if row is None:
            return
        limits = self.ui.get(category_id).dir_expand_limits
        self.ui.update(category_id, dir_expand_limits={**limits, row.directory: self.default_dir_limit})

    def _copy_directory_path(self, category_id: str) -> None:
        row = self._caret_row(category_id)
        if row is None:
            return

        directory = row.directory
        self._copy_generation += 1
        generation = self._copy_generation
        self.status.cancel()

        def _copy() -> None:
            try:
                self._clipboard(directory)
            except ClipboardError as e:
                log.debug("Clipboard copy failed: %s", e)
                message, seconds = f"Failed to copy: {e}", COPY_FAILED_STATUS_SECONDS
            else:
                message, seconds = f"Copied: {directory}", COPY_STATUS_SECONDS
            with self.lock:
                if self._closed or generation != self._copy_generation:
                    return
                self.status.show(message, seconds)
                if self.status.on_change:
                    self.status.on_change()

        self._run_async(_copy)


def nearest_selectable(rows: list[DisplayRow], caret: int) -> int:
    """Index of the selectable row closest to *caret*, preferring earlier rows.

    Out-of-range carets are clamped first; with no selectable row the
    clamped caret is returned unchanged.
    """
    if not rows:
        return 0
    caret = max(0, min(caret, len(rows) - 1))
    for distance in range(len(rows)):
        for index in (caret - distance, caret + distance):
            if 0 <= index < len(rows) and rows[index].selectable:
                return index
    return caret
