"""Projection of picker state onto terminal lines."""

from __future__ import annotations

import click

from broom.picker.controller import FilePicker
from broom.picker.grouping import DisplayRow
from broom.picker.paths import truncate_file_name
from broom.utils import bytes_to_human

FILES_PAGE_SIZE = 6
FILE_NAME_WIDTH = 35
CATEGORY_NAME_WIDTH = 25
INDENT = "    "

CATEGORY_HELP = "space: toggle | a: all | i: invert{files_hint} | enter: confirm"
FILES_HELP = (
    "space: toggle | a: all | d: select dir | i: invert | m: expand | h: collapse "
    "| c: copy path | ←/backspace: back | enter: confirm"
)

SAFETY_COLORS = {"safe": "green", "moderate": "yellow", "risky": "red"}


def page_window(caret: int, total: int, page_size: int = FILES_PAGE_SIZE) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of a window centred on *caret*.

    The window never starts before 0 nor runs past *total*.
    """
    start = max(0, min(caret - page_size // 2, total - page_size))
    return start, min(total, start + page_size)


def render(picker: FilePicker, message: str) -> list[str]:
    """Render the whole picker: prompt, category rows, inline file rows and help."""
    lines = [f"{click.style('?', fg='green')} {click.style(message, bold=True)}", ""]

    for index, result in enumerate(picker.results):
        category = result.category
        is_caret = picker.pane == "categories" and index == picker.category_caret
        checkbox = click.style("◉", fg="green") if picker.selection.is_selected(category.id) else click.style("◯", dim=True)
        caret = click.style("> ", fg="cyan") if is_caret else "  "
        safety = click.style("●", fg=SAFETY_COLORS[category.safety_level])
        name = category.name.ljust(CATEGORY_NAME_WIDTH)
        count = f"{len(result.items)} items".ljust(12)
        size = bytes_to_human(result.total_size).rjust(10)
        lines.append(f"{caret}{checkbox} {safety} {name} {click.style(count, dim=True)} {click.style(size, fg='yellow')}")

        if picker.shows_files_inline(category.id):
            lines.extend(render_file_rows(picker, category.id))

    lines.append("")
    lines.append(help_line(picker))
    return lines


def render_file_rows(picker: FilePicker, category_id: str) -> list[str]:
    """Render the paginated file rows shown under one category."""
    rows = picker.rows_for(category_id)
    state = picker.ui.get(category_id)
    selected = picker.selection.selected_files(category_id)

    if state.active:
        start, end = page_window(state.file_caret, len(rows))
    else:
        start, end = 0, min(len(rows), FILES_PAGE_SIZE)

    lines = []
    for index in range(start, end):
        is_caret = state.active and index == state.file_caret
        line = _render_row(rows[index], is_caret, selected)
        lines.append(line if state.active else click.style(click.unstyle(line), dim=True))
    return lines


def _render_row(row: DisplayRow, is_caret: bool, selected: frozenset[str]) -> str:
    caret = click.style("> ", fg="cyan") if is_caret else "  "

    if row.kind == "directory-header":
        return f"{INDENT}{caret}{click.style(row.display_name, dim=True)}{click.style(f' ({row.total_in_dir})', dim=True)}"

    if row.kind == "expand-hint":
        return f"{INDENT}{caret}{click.style(f'+{row.hidden_count} files', fg='black', bg='cyan')}"

    assert row.item is not None
    checkbox = click.style("●", fg="green") if row.item.path in selected else click.style("○", dim=True)
    name = truncate_file_name(row.display_name, FILE_NAME_WIDTH).ljust(FILE_NAME_WIDTH)
    size = bytes_to_human(row.item.size).rjust(10)
    return f"{INDENT}{caret}{checkbox} {name} {click.style(size, fg='magenta')}"


def help_line(picker: FilePicker) -> str:
    """Contextual key help; the file pane shows the clipboard status instead while set."""
    if picker.pane == "categories":
        files_hint = " | →: see files" if picker.can_enter_files(picker.current_result.category.id) else ""
        return click.style(CATEGORY_HELP.format(files_hint=files_hint), dim=True)

    status = picker.status.message
    if status:
        return click.style(status, fg="yellow")
    return click.style(FILES_HELP, dim=True)
