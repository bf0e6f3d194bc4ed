"""Tests for anemos_ext.platform.paths module."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from anemos_ext.platform.paths import APP_NAME, clear_caches, user_cache_dir, user_config_dir


@pytest.fixture(autouse=True)
def _fresh_paths() -> Iterator[None]:
    clear_caches()
    yield
    clear_caches()


class TestUnixPaths:
    @pytest.fixture(autouse=True)
    def _unix(self) -> Iterator[None]:
        with patch("anemos_ext.platform.paths.is_windows", return_value=False):
            yield

    def test_cache_dir_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        assert user_cache_dir() == tmp_path / APP_NAME

    def test_cache_dir_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert user_cache_dir() == tmp_path / ".cache" / APP_NAME

    def test_config_dir_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert user_config_dir() == tmp_path / ".config" / APP_NAME


class TestWindowsPaths:
    @pytest.fixture(autouse=True)
    def _windows(self) -> Iterator[None]:
        with patch("anemos_ext.platform.paths.is_windows", return_value=True):
            yield

    def test_cache_dir_local_app_data(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
        assert user_cache_dir() == tmp_path / APP_NAME

    def test_config_dir_app_data(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert user_config_dir() == tmp_path / APP_NAME
