"""Typed configuration loading and access.

The optional config file is TOML:

    [release]
    host = "github.com"
    org = "ohayocorp"
    project = "anemos"
    version = "latest"

    [download]
    max_redirects = 5
    timeout = 60.0

    [tool]
    timeout = 120.0

    [paths]
    cache_dir = "~/.cache/anemos-ext"
    install_root = "~/src/my-extension"

Every key is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "DownloadConfig",
    "PathsConfig",
    "ReleaseConfig",
    "ToolConfig",
    "load_config",
    "DEFAULT_MAX_REDIRECTS",
]

DEFAULT_HOST = "github.com"
DEFAULT_ORG = "ohayocorp"
DEFAULT_PROJECT = "anemos"
DEFAULT_VERSION = "latest"
DEFAULT_MAX_REDIRECTS = 5


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Where release assets are published."""

    host: str = DEFAULT_HOST
    org: str = DEFAULT_ORG
    project: str = DEFAULT_PROJECT
    version: str = DEFAULT_VERSION


@dataclass(frozen=True, slots=True)
class DownloadConfig:
    """Download behaviour. A timeout of None waits indefinitely."""

    max_redirects: int = DEFAULT_MAX_REDIRECTS
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Tool invocation settings."""

    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """User-provided path overrides (may contain ~)."""

    cache_dir: str | None = None
    install_root: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    tool: ToolConfig = field(default_factory=ToolConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        download: StrDict = get_table(data, "download") or {}
        tool: StrDict = get_table(data, "tool") or {}
        paths: StrDict = get_table(data, "paths") or {}

        max_redirects = get_int(download, "max_redirects")
        if max_redirects is not None and max_redirects < 0:
            raise ValueError(f"download.max_redirects must be >= 0, got {max_redirects}")

        return cls(
            release=ReleaseConfig(
                host=get_str(release, "host") or DEFAULT_HOST,
                org=get_str(release, "org") or DEFAULT_ORG,
                project=get_str(release, "project") or DEFAULT_PROJECT,
                version=get_str(release, "version") or DEFAULT_VERSION,
            ),
            download=DownloadConfig(
                max_redirects=DEFAULT_MAX_REDIRECTS if max_redirects is None else max_redirects,
                timeout=get_float(download, "timeout"),
            ),
            tool=ToolConfig(timeout=get_float(tool, "timeout")),
            paths=PathsConfig(
                cache_dir=get_str(paths, "cache_dir"),
                install_root=get_str(paths, "install_root"),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
