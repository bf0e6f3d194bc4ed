"""Platform-aware user directories.

The cache directory is the CacheDirectory the downloaded binary lives in.
It is user-scoped and persists across runs.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_windows

__all__ = [
    "home",
    "user_cache_dir",
    "user_config_dir",
    "clear_caches",
    "APP_NAME",
]

APP_NAME = "anemos-ext"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory (USERPROFILE on Windows, HOME on Unix)."""
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """User-level configuration directory.

    Location: ~/.config/anemos-ext/ (Linux/macOS) or %APPDATA%/anemos-ext/ (Windows)
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """User-level cache directory.

    Location: ~/.cache/anemos-ext/ (Linux/macOS) or %LOCALAPPDATA%/anemos-ext/ (Windows)
    """
    if is_windows():
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / APP_NAME
        return home() / "AppData" / "Local" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    return home() / ".cache" / APP_NAME


def clear_caches() -> None:
    """Clear cached paths (for tests that change environment variables)."""
    home.cache_clear()
    user_config_dir.cache_clear()
    user_cache_dir.cache_clear()
