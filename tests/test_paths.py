"""Tests for directory path and file name truncation."""

from __future__ import annotations

from pathlib import Path

from broom.picker.paths import MAX_DIR_DISPLAY_LENGTH, truncate_directory_path, truncate_file_name


class TestTruncateFileName:
    def test_short_name_unchanged(self):
        assert truncate_file_name("report.pdf", 35) == "report.pdf"

    def test_name_exactly_at_budget_unchanged(self):
        assert truncate_file_name("abcde.txt", 9) == "abcde.txt"

    def test_keeps_extension_and_splits_base(self):
        result = truncate_file_name("a-very-long-file-name.txt", 15)
        assert result == "a-ve...name.txt"
        assert len(result) == 15

    def test_odd_budget_biases_prefix(self):
        # 16 - 4 (.txt) - 3 (...) = 9 -> 5 head, 4 tail
        assert truncate_file_name("a-very-long-file-name.txt", 16) == "a-ver...name.txt"

    def test_name_without_extension(self):
        result = truncate_file_name("abcdefghijklmnopqrstuvwxyz", 10)
        assert result == "abcd...xyz"
        assert len(result) == 10

    def test_dotfile_has_no_extension(self):
        result = truncate_file_name(".bash_history_backup", 10)
        assert result == ".bas...kup"

    def test_extension_exceeding_budget_hard_truncates(self):
        result = truncate_file_name("file.verylongextension", 8)
        assert result == "file...."
        assert len(result) == 8

    def test_tiny_budget(self):
        assert truncate_file_name("something.txt", 2) == ".."


class TestTruncateDirectoryPath:
    def test_home_contracted(self):
        path = str(Path.home() / "Downloads")
        assert truncate_directory_path(path) == "~/Downloads"

    def test_absolute_paths_not_contracted(self):
        path = str(Path.home() / "Downloads")
        assert truncate_directory_path(path, absolute_paths=True) == path

    def test_short_path_unchanged(self):
        assert truncate_directory_path("/var/tmp") == "/var/tmp"

    def test_long_path_collapses_middle(self):
        path = "/srv/" + "/".join(f"segment{i}" for i in range(10)) + "/project/build"
        result = truncate_directory_path(path)
        assert result == "/.../project/build"

    def test_long_tail_segments_hard_cut(self):
        path = "/data/x/" + "a" * 40 + "/" + "b" * 40
        result = truncate_directory_path(path)
        assert len(result) == MAX_DIR_DISPLAY_LENGTH
        assert result.startswith("...")
        assert result.endswith("b" * 40)

    def test_few_segments_hard_cut(self):
        path = "/" + "c" * 80
        result = truncate_directory_path(path)
        assert len(result) == MAX_DIR_DISPLAY_LENGTH
        assert result == "..." + "c" * (MAX_DIR_DISPLAY_LENGTH - 3)
