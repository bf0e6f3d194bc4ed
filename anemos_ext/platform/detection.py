"""Platform and architecture detection.

Detection runs lazily and is cached for the life of the process, so the
PlatformTarget used to pick a release asset never changes under a caller.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "PlatformTarget",
    "detect_arch",
    "detect_platform",
    "detect_target",
    "is_windows",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self == Platform.WINDOWS else ""

    def exe_name(self, name: str) -> str:
        """Get executable name with platform-appropriate suffix.

        Example: exe_name("anemos") -> "anemos.exe" on Windows, "anemos" elsewhere.
        """
        return f"{name}{self.exe_suffix}"

    @property
    def release_id(self) -> str:
        """Platform id used in release asset names (unknown maps to linux)."""
        match self:
            case Platform.WINDOWS:
                return "windows"
            case Platform.MACOS:
                return "darwin"
            case _:
                return "linux"


class Arch(Enum):
    """CPU architecture."""

    X64 = auto()
    ARM64 = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def release_id(self) -> str:
        """Arch id used in release asset names (unknown maps to amd64)."""
        return "arm64" if self == Arch.ARM64 else "amd64"


@dataclass(frozen=True, slots=True)
class PlatformTarget:
    """The {OS, architecture} pair used to pick a release asset."""

    platform: Platform
    arch: Arch

    @property
    def platform_id(self) -> str:
        return self.platform.release_id

    @property
    def arch_id(self) -> str:
        return self.arch.release_id

    @property
    def is_windows(self) -> bool:
        return self.platform == Platform.WINDOWS

    def binary_name(self, name: str) -> str:
        return self.platform.exe_name(name)

    def __str__(self) -> str:
        return f"{self.platform_id}-{self.arch_id}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: avoid platform.system() on Windows, it may query WMI and hang.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the current CPU architecture (cached)."""
    if detect_platform() == Platform.WINDOWS:
        env_arch = (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or ""
        )
        machine = env_arch.lower()
    else:
        machine = _platform.machine().lower()
    if machine in ("x86_64", "amd64", "x64"):
        return Arch.X64
    if machine in ("aarch64", "arm64"):
        return Arch.ARM64
    return Arch.UNKNOWN


@lru_cache(maxsize=1)
def detect_target() -> PlatformTarget:
    """Detect the PlatformTarget for this process (cached)."""
    return PlatformTarget(platform=detect_platform(), arch=detect_arch())


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS
