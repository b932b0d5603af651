"""Tests for the picker's terminal projection."""

from __future__ import annotations

import click
import pytest

from broom.picker.controller import FilePicker
from broom.picker.keys import Key
from broom.picker.render import FILES_HELP, FILES_PAGE_SIZE, help_line, page_window, render, render_file_rows
from broom.picker.status import StatusLine


def _plain(lines: list[str]) -> list[str]:
    return [click.unstyle(line) for line in lines]


@pytest.fixture
def picker(make_result, fake_timers):
    files = [(f"/big/f{i:02d}.bin", 1000 - i) for i in range(12)]
    return FilePicker(
        [make_result("trash", [("/t/a", 10)]), make_result("large-files", files)],
        ["large-files"],
        status=StatusLine(timer_factory=fake_timers),
        run_async=lambda task: task(),
        clipboard=lambda text: None,
    )


class TestPageWindow:
    def test_window_at_start(self):
        assert page_window(0, 20) == (0, 6)

    def test_window_centred_on_caret(self):
        assert page_window(10, 20) == (7, 13)

    def test_window_clamped_at_end(self):
        assert page_window(19, 20) == (14, 20)

    def test_short_sequence(self):
        assert page_window(2, 4) == (0, 4)

    def test_always_contains_caret(self):
        for total in range(1, 15):
            for caret in range(total):
                start, end = page_window(caret, total)
                assert start <= caret < end
                assert end - start == min(total, FILES_PAGE_SIZE)


class TestRender:
    def test_category_rows(self, picker):
        lines = _plain(render(picker, "Pick"))
        assert lines[0] == "? Pick"
        assert lines[2].startswith("> ◯")
        assert "Trash" in lines[2]
        assert "Large Files" in lines[3]
        assert "12 items" in lines[3]

    def test_selected_marker(self, picker):
        picker.handle_key(Key.SPACE)
        lines = _plain(render(picker, "Pick"))
        assert lines[2].startswith("> ◉")

    def test_inline_files_when_visible(self, picker):
        picker.handle_key(Key.DOWN)
        picker.handle_key(Key.SPACE)
        lines = _plain(render(picker, "Pick"))
        assert len(lines) == 2 + 2 + FILES_PAGE_SIZE + 2
        assert "/big (12)" in lines[4]

    def test_file_rows_follow_caret(self, picker):
        picker.handle_key(Key.DOWN)
        picker.handle_key(Key.RIGHT)
        for _ in range(4):
            picker.handle_key(Key.DOWN)
        lines = _plain(render_file_rows(picker, "large-files"))
        assert len(lines) == FILES_PAGE_SIZE
        assert any(line.lstrip().startswith("> ") for line in lines)
        assert any("f04.bin" in line and "> " in line for line in lines)

    def test_expand_hint_row(self, picker):
        picker.handle_key(Key.DOWN)
        picker.handle_key(Key.RIGHT)
        for _ in range(4):
            picker.handle_key(Key.DOWN)
        lines = _plain(render_file_rows(picker, "large-files"))
        assert lines[-1].strip() == "+7 files"


class TestHelpLine:
    def test_category_help_offers_files(self, picker):
        assert "→: see files" not in click.unstyle(help_line(picker))
        picker.handle_key(Key.DOWN)
        assert "→: see files" in click.unstyle(help_line(picker))

    def test_file_help(self, picker):
        picker.handle_key(Key.DOWN)
        picker.handle_key(Key.RIGHT)
        assert click.unstyle(help_line(picker)) == FILES_HELP

    def test_status_replaces_file_help(self, picker):
        picker.handle_key(Key.DOWN)
        picker.handle_key(Key.RIGHT)
        picker.handle_key(Key.COPY_PATH)
        assert click.unstyle(help_line(picker)) == "Copied: /big"
