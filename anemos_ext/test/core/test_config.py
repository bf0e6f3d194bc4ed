"""Tests for anemos_ext.core.config module."""

from pathlib import Path

from anemos_ext.core.config import (
    DEFAULT_MAX_REDIRECTS,
    Config,
    load_config,
)
from anemos_ext.core.result import Err, Ok


class TestConfigDefaults:
    def test_release_defaults(self) -> None:
        config = Config()
        assert config.release.host == "github.com"
        assert config.release.org == "ohayocorp"
        assert config.release.project == "anemos"
        assert config.release.version == "latest"

    def test_no_timeouts_by_default(self) -> None:
        config = Config()
        assert config.download.timeout is None
        assert config.tool.timeout is None
        assert config.download.max_redirects == DEFAULT_MAX_REDIRECTS


class TestFromDict:
    def test_partial_tables(self) -> None:
        config = Config.from_dict({"release": {"version": "v1.4.0"}, "download": {"timeout": 30}})
        assert config.release.version == "v1.4.0"
        assert config.release.project == "anemos"
        assert config.download.timeout == 30.0

    def test_paths(self) -> None:
        config = Config.from_dict({"paths": {"cache_dir": "~/cache", "install_root": " "}})
        assert config.paths.cache_dir == "~/cache"
        assert config.paths.install_root is None

    def test_zero_redirects_allowed(self) -> None:
        config = Config.from_dict({"download": {"max_redirects": 0}})
        assert config.download.max_redirects == 0

    def test_wrong_types_fall_back(self) -> None:
        config = Config.from_dict({"release": {"host": 42}, "download": {"max_redirects": True}})
        assert config.release.host == "github.com"
        assert config.download.max_redirects == DEFAULT_MAX_REDIRECTS


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[release]\norg = "acme"\n\n[tool]\ntimeout = 5\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.release.org == "acme"
        assert result.value.tool.timeout == 5.0

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_negative_redirects_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[download]\nmax_redirects = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "max_redirects" in result.error.message
