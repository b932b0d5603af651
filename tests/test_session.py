"""Tests for the terminal picker loop with scripted input."""

from __future__ import annotations

import pytest

from broom.picker.session import PickerAborted, run_picker


def _reader(*keys: str):
    pending = list(keys)

    def read_key() -> str:
        key = pending.pop(0)
        if isinstance(key, type) and issubclass(key, BaseException):
            raise key()
        return key

    return read_key


class TestRunPicker:
    def test_confirm_returns_selection(self, make_result, capsys):
        results = [make_result("trash", [("/t/a", 1)]), make_result("large-files", [("/l/a", 5), ("/l/b", 6)])]
        outcome = run_picker(results, "Pick", {"large-files"}, read_key=_reader("\x1b[B", " ", "x", "\r"))

        assert outcome.selected_categories == frozenset({"large-files"})
        assert outcome.selected_files_by_category == {"large-files": frozenset({"/l/a", "/l/b"})}
        out = capsys.readouterr().out
        assert "Pick" in out
        assert out.startswith("\x1b[?25l")
        assert out.endswith("\x1b[?25h\n")

    def test_file_pane_round_trip(self, make_result):
        results = [make_result("large-files", [("/l/a", 5), ("/l/b", 6)])]
        outcome = run_picker(results, "Pick", {"large-files"}, read_key=_reader("\x1b[C", " ", "\x7f", "\n"))
        assert outcome.selected_files_by_category == {"large-files": frozenset({"/l/b"})}

    @pytest.mark.parametrize("signal", [KeyboardInterrupt, EOFError])
    def test_interrupt_aborts(self, make_result, signal):
        results = [make_result("trash", [("/t/a", 1)])]
        with pytest.raises(PickerAborted):
            run_picker(results, "Pick", read_key=_reader(" ", signal))
