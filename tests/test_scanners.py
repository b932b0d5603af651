"""Tests for built-in scanners using a fake home directory."""

from __future__ import annotations

import os
import time

import pytest

from broom.scanners.base import ScanOptions
from broom.scanners.browser_cache import BrowserCacheScanner
from broom.scanners.dev_cache import DevCacheScanner
from broom.scanners.downloads import OldDownloadsScanner, get_downloads_dir
from broom.scanners.duplicates import DuplicatesScanner
from broom.scanners.large_files import LargeFilesScanner
from broom.scanners.logs import LogFilesScanner, _is_log
from broom.scanners.temp_files import TempFilesScanner
from broom.scanners.trash import TrashScanner
from broom.scanners.user_cache import UserCacheScanner

DAY = 86400


def _age(path, days: float) -> None:
    stamp = time.time() - days * DAY
    os.utime(path, (stamp, stamp))


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Fake home with XDG directories inside it."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    return home


@pytest.fixture
def fake_cache(home):
    cache = home / ".cache"
    cache.mkdir()
    (cache / "some_app").mkdir()
    (cache / "some_app" / "data.bin").write_bytes(b"x" * 1024)
    (cache / "another_app").mkdir()
    (cache / "another_app" / "file.dat").write_bytes(b"y" * 2048)

    # Excluded
    (cache / "fontconfig").mkdir()
    (cache / "fontconfig" / "cache.dat").write_bytes(b"z" * 512)

    # Scanned by the browser and dev cache scanners
    (cache / "pip").mkdir()
    (cache / "pip" / "wheel.whl").write_bytes(b"w" * 4096)
    (cache / "google-chrome" / "Default").mkdir(parents=True)
    (cache / "google-chrome" / "Default" / "blob").write_bytes(b"c" * 300)
    return cache


@pytest.fixture
def downloads(home):
    d = home / "Downloads"
    d.mkdir()
    return d


class TestUserCacheScanner:
    def test_scan_skips_excluded_and_owned(self, fake_cache):
        result = UserCacheScanner().scan()
        assert {i.name for i in result.items} == {"some_app", "another_app"}
        assert result.total_size == 1024 + 2048
        assert all(i.is_directory for i in result.items)

    def test_unavailable_without_cache(self, home):
        assert not UserCacheScanner().is_available()


class TestBrowserCacheScanner:
    def test_scan_profiles(self, fake_cache):
        result = BrowserCacheScanner().scan()
        assert [i.name for i in result.items] == ["Default"]
        assert result.total_size == 300


class TestDevCacheScanner:
    def test_scan_caches(self, fake_cache, home):
        npm = home / ".npm" / "_cacache"
        npm.mkdir(parents=True)
        (npm / "index").write_bytes(b"n" * 100)

        result = DevCacheScanner().scan()
        assert {i.path for i in result.items} == {str(fake_cache / "pip"), str(npm)}
        assert result.total_size == 4096 + 100


class TestLogFilesScanner:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("app.log", True),
            ("app.log.1", True),
            ("app.log.2.gz", True),
            ("app.log.old", True),
            ("app.log.bak", False),
            ("catalog.json", False),
            ("log", False),
            ("changelog.txt", False),
        ],
    )
    def test_is_log(self, name, expected):
        assert _is_log(name) is expected

    def test_scan_state_and_cache(self, home):
        state = home / ".local" / "state" / "app"
        state.mkdir(parents=True)
        (state / "app.log").write_text("line\n")
        (state / "app.log.1").write_text("older\n")
        (state / "notes.txt").write_text("keep\n")
        (state / "empty.log").touch()
        cache = home / ".cache" / "tool"
        cache.mkdir(parents=True)
        (cache / "debug.log").write_text("dbg\n")

        result = LogFilesScanner().scan()
        assert {i.name for i in result.items} == {"app.log", "app.log.1", "debug.log"}


class TestTempFilesScanner:
    def test_only_old_entries(self, tmp_path, monkeypatch):
        tmp = tmp_path / "tmp"
        tmp.mkdir()
        old = tmp / "old.txt"
        old.write_text("old")
        _age(old, 3)
        (tmp / "fresh.txt").write_text("fresh")
        monkeypatch.setattr("broom.scanners.temp_files._TMP_DIR", tmp)

        result = TempFilesScanner().scan()
        assert [i.name for i in result.items] == ["old.txt"]


class TestTrashScanner:
    def test_scan_files_and_info(self, home):
        trash = home / ".local" / "share" / "Trash"
        (trash / "files").mkdir(parents=True)
        (trash / "info").mkdir()
        (trash / "files" / "deleted.txt").write_bytes(b"d" * 700)
        (trash / "info" / "deleted.txt.trashinfo").write_bytes(b"i" * 60)

        scanner = TrashScanner()
        assert scanner.is_available()
        result = scanner.scan()
        assert result.total_size == 760
        assert len(result.items) == 2

    def test_unavailable_without_trash(self, home):
        assert TrashScanner().unavailable_reason == "Trash directory not found"


class TestDownloadsScanners:
    def test_downloads_dir_from_user_dirs(self, home):
        custom = home / "Stuff"
        custom.mkdir()
        (home / ".config").mkdir()
        (home / ".config" / "user-dirs.dirs").write_text('XDG_DOWNLOAD_DIR="$HOME/Stuff"\n')
        assert get_downloads_dir() == custom

    def test_missing_downloads(self, home):
        assert get_downloads_dir() is None
        assert not OldDownloadsScanner().is_available()

    def test_old_downloads(self, downloads):
        old = downloads / "old.zip"
        old.write_bytes(b"o" * 50)
        _age(old, 40)
        (downloads / "new.zip").write_bytes(b"n" * 50)

        result = OldDownloadsScanner().scan(ScanOptions(days_old=30))
        assert [i.name for i in result.items] == ["old.zip"]
        assert result.items[0].modified_at is not None

    def test_duplicates_keep_oldest(self, downloads):
        original = downloads / "photo.jpg"
        original.write_bytes(b"same")
        _age(original, 10)
        copy = downloads / "photo (1).jpg"
        copy.write_bytes(b"same")
        (downloads / "other.jpg").write_bytes(b"diff")

        result = DuplicatesScanner().scan()
        assert [i.path for i in result.items] == [str(copy)]
        assert result.total_size == 4


class TestLargeFilesScanner:
    def test_threshold_and_hidden_dirs(self, home):
        (home / "big.iso").write_bytes(b"b" * 200)
        (home / "small.txt").write_bytes(b"s" * 10)
        (home / "media").mkdir()
        (home / "media" / "movie.mkv").write_bytes(b"m" * 300)
        (home / ".hidden").mkdir()
        (home / ".hidden" / "blob").write_bytes(b"h" * 500)

        result = LargeFilesScanner().scan(ScanOptions(min_size=100))
        assert {i.name for i in result.items} == {"big.iso", "movie.mkv"}


class TestScannerClean:
    def test_clean_removes_files_and_dirs(self, fake_cache):
        scanner = UserCacheScanner()
        result = scanner.scan()
        cleaned = scanner.clean(result.items)

        assert cleaned.cleaned_items == 2
        assert cleaned.freed_space == 1024 + 2048
        assert cleaned.errors == []
        assert not (fake_cache / "some_app").exists()
        assert (fake_cache / "fontconfig").exists()

    def test_dry_run_touches_nothing(self, fake_cache):
        scanner = UserCacheScanner()
        result = scanner.scan()
        cleaned = scanner.clean(result.items, dry_run=True)

        assert cleaned.cleaned_items == 2
        assert cleaned.freed_space == 1024 + 2048
        assert (fake_cache / "some_app").exists()
