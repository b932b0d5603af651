"""Terminal loop driving a :class:`FilePicker`."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Callable

import click

from broom.models.scan_result import ScanResult
from broom.picker.controller import FilePicker
from broom.picker.keys import decode_key
from broom.picker.render import render
from broom.picker.selection import PickerResult
from broom.picker.status import StatusLine

log = logging.getLogger(__name__)

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


class PickerAborted(Exception):
    """The user interrupted the picker; nothing was selected."""


class _Screen:
    """Redraws the picker in place below the cursor."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._height = 0

    def draw(self, lines: list[str]) -> None:
        with self._lock:
            out = []
            if self._height:
                # Back to the first line of the previous frame, then clear below.
                out.append(f"\x1b[{self._height - 1}F" if self._height > 1 else "\r")
                out.append("\x1b[J")
            out.append("\n".join(lines))
            click.echo("".join(out), nl=False, color=True)
            self._height = len(lines)

    def finish(self) -> None:
        with self._lock:
            click.echo(_SHOW_CURSOR, color=True)


def run_picker(
    results: list[ScanResult],
    message: str,
    file_selection_ids: Iterable[str] = (),
    absolute_paths: bool = False,
    read_key: Callable[[], str] = click.getchar,
) -> PickerResult:
    """Run an interactive picker session until the user confirms.

    Raises:
        PickerAborted: On Ctrl-C or end of input.
    """
    screen = _Screen()
    picker: FilePicker | None = None

    def redraw() -> None:
        if picker is None:
            return
        # Status expiry and clipboard results call this from their own threads.
        with picker.lock:
            if not picker.closed:
                screen.draw(render(picker, message))

    picker = FilePicker(
        results,
        file_selection_ids,
        absolute_paths,
        status=StatusLine(on_change=redraw),
    )

    click.echo(_HIDE_CURSOR, nl=False, color=True)
    try:
        redraw()
        while True:
            key = decode_key(read_key())
            if key is None:
                continue
            with picker.lock:
                outcome = picker.handle_key(key)
                redraw()
            if outcome is not None:
                log.debug(
                    "Picker confirmed: %d categories, %d files",
                    len(outcome.selected_categories),
                    sum(len(p) for p in outcome.selected_files_by_category.values()),
                )
                return outcome
    except (KeyboardInterrupt, EOFError):
        raise PickerAborted() from None
    finally:
        picker.close()
        screen.finish()
