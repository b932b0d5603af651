"""Per-category navigation state of the file pane."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FilePickerState:
    """UI state of one category's file list.

    ``visible`` shows the list inline under the category row, ``active``
    gives it keyboard focus, ``file_caret`` indexes its display rows and
    ``dir_expand_limits`` overrides the per-directory visibility budget.
    """

    visible: bool = False
    active: bool = False
    file_caret: int = 0
    dir_expand_limits: dict[str, int] = field(default_factory=dict)

    def copy(self) -> FilePickerState:
        return dataclasses.replace(self, dir_expand_limits=dict(self.dir_expand_limits))


class UIStateStore:
    """Keeps a :class:`FilePickerState` per category id.

    States are created lazily and survive pane switches, so re-entering
    a category restores its caret and expansions.  At most one category
    is active at any time.
    """

    _FIELDS = frozenset(f.name for f in dataclasses.fields(FilePickerState))

    def __init__(self) -> None:
        self._states: dict[str, FilePickerState] = {}

    def get(self, category_id: str) -> FilePickerState:
        """Return a copy of the category's state, or the default state."""
        state = self._states.get(category_id)
        return state.copy() if state is not None else FilePickerState()

    def update(self, category_id: str, **changes: Any) -> FilePickerState:
        """Merge *changes* into the category's state.

        ``dir_expand_limits`` replaces the stored mapping wholesale.
        Focus moves through :meth:`activate` only; passing ``active=True``
        while another category holds focus raises ``ValueError``.
        """
        unknown = set(changes) - self._FIELDS
        if unknown:
            raise TypeError(f"Unknown picker state fields: {', '.join(sorted(unknown))}")

        if changes.get("active") and self.active_category() not in (None, category_id):
            raise ValueError("Another category is active; use activate() to move focus")

        state = self.get(category_id)
        for name, value in changes.items():
            if name == "dir_expand_limits":
                value = dict(value)
            setattr(state, name, value)
        self._states[category_id] = state
        self._check_single_active()
        return state.copy()

    def activate(self, category_id: str | None) -> None:
        """Give focus to *category_id* (also making it visible), or to nobody."""
        for state in self._states.values():
            state.active = False
        if category_id is not None:
            state = self.get(category_id)
            state.active = True
            state.visible = True
            self._states[category_id] = state
        self._check_single_active()

    def active_category(self) -> str | None:
        for category_id, state in self._states.items():
            if state.active:
                return category_id
        return None

    def clear(self) -> None:
        """Forget every category's state."""
        self._states.clear()

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def _check_single_active(self) -> None:
        active = [cid for cid, state in self._states.items() if state.active]
        if len(active) > 1:
            raise RuntimeError(f"Multiple active categories: {', '.join(active)}")
