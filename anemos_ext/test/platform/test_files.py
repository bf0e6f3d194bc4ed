"""Tests for anemos_ext.platform.files module."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from anemos_ext.platform.files import atomic_write_text, make_executable, remove_quietly


class TestAtomicWriteText:
    def test_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "version.json"
        atomic_write_text(path, "{}")
        assert path.read_text(encoding="utf-8") == "{}"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "version.json"
        path.write_text("old", encoding="utf-8")

        atomic_write_text(path, "new")

        assert path.read_text(encoding="utf-8") == "new"

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        atomic_write_text(tmp_path / "version.json", "{}")
        assert [p.name for p in tmp_path.iterdir()] == ["version.json"]


class TestMakeExecutable:
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_sets_755(self, tmp_path: Path) -> None:
        path = tmp_path / "anemos"
        path.write_bytes(b"\x7fELF")
        path.chmod(0o600)

        make_executable(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o755


class TestRemoveQuietly:
    def test_removes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "partial"
        path.write_bytes(b"x")

        assert remove_quietly(path) is None
        assert not path.exists()

    def test_missing_file_is_fine(self, tmp_path: Path) -> None:
        assert remove_quietly(tmp_path / "missing") is None

    def test_returns_error_for_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "dir"
        target.mkdir()

        error = remove_quietly(target)

        assert isinstance(error, OSError)
        assert target.exists()
