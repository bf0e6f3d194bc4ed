"""Tool resolution: finding or acquiring the anemos binary.

This module provides a ToolResolver that tries, in order:
1. The system search path (bare command name)
2. A previously downloaded copy in the cache directory
3. A fresh download, after asking for consent

The first source that succeeds wins; later sources are not touched.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from anemos_ext.core.locks import path_lock
from anemos_ext.core.logging import get_logger
from anemos_ext.core.result import Err, Ok, Result
from anemos_ext.platform import process
from anemos_ext.platform.files import make_executable, remove_quietly
from anemos_ext.tools.errors import (
    AcquisitionDeclined,
    BinaryUnavailable,
    DownloadError,
    WriteFailed,
)

if TYPE_CHECKING:
    from anemos_ext.platform.detection import PlatformTarget
    from anemos_ext.tools.download import Downloader
    from anemos_ext.tools.release import ReleaseSource

__all__ = [
    "AcquisitionPrompt",
    "LocationSource",
    "ToolLocation",
    "ToolResolver",
]

log = get_logger(__name__)

PRESENCE_ARGS = ("--help",)


class LocationSource(Enum):
    """Where a ToolLocation came from."""

    SEARCH_PATH = "search_path"
    CACHE = "cache"
    DOWNLOADED = "downloaded"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ToolLocation:
    """An executable reference: a bare command name or an absolute path.

    Attributes:
        command: What to put in argv[0]
        source: Which resolution step produced it
    """

    command: str
    source: LocationSource

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("Tool command cannot be empty")
        if self.source != LocationSource.SEARCH_PATH and not Path(self.command).is_absolute():
            raise ValueError(f"Cached tool path must be absolute: {self.command!r}")

    @property
    def path(self) -> Path | None:
        """Absolute path, or None when resolved through the search path."""
        if self.source == LocationSource.SEARCH_PATH:
            return None
        return Path(self.command)

    def argv(self, *args: str) -> list[str]:
        return [self.command, *args]

    def __str__(self) -> str:
        return self.command


class AcquisitionPrompt(Protocol):
    """The host side of an acquisition: consent and progress messages."""

    def confirm_download(self, url: str) -> bool:
        """Ask whether the binary may be downloaded from url."""
        ...

    def download_started(self, url: str) -> None: ...

    def download_finished(self, path: Path) -> None: ...


class ToolResolver:
    """Locates the anemos binary for the current platform.

    Usage:
        resolver = ToolResolver(
            cache_dir=user_cache_dir(),
            target=detect_target(),
            release=ReleaseSource(),
            downloader=Downloader(RealHttpClient()),
            prompt=prompt,
        )
        match resolver.locate():
            case Ok(location):
                run(location.argv("build", "index.js"))
            case Err(error):
                console.error(str(error))
    """

    def __init__(
        self,
        *,
        cache_dir: Path,
        target: PlatformTarget,
        release: ReleaseSource,
        downloader: Downloader,
        prompt: AcquisitionPrompt,
        probe: Callable[[list[str]], bool] = process.probe,
    ) -> None:
        """Initialize resolver.

        Args:
            cache_dir: Directory holding the downloaded binary
            target: Platform/arch used for binary name and asset URL
            release: Release source to download from
            downloader: Downloader used for acquisition
            prompt: Consent and progress collaborator
            probe: Presence check for a command (injectable for tests)
        """
        self._cache_dir = cache_dir.absolute()
        self._target = target
        self._release = release
        self._downloader = downloader
        self._prompt = prompt
        self._probe = probe

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def binary_name(self) -> str:
        return self._release.binary_name(self._target)

    @property
    def binary_path(self) -> Path:
        """Deterministic cache location: {cache_dir}/{binary_name}."""
        return self._cache_dir / self.binary_name

    @property
    def download_url(self) -> str:
        return self._release.download_url(self._target)

    def cached(self) -> Path | None:
        """Return the cached binary path if one has been downloaded."""
        path = self.binary_path
        return path if path.exists() else None

    def remove_cached(self) -> bool:
        """Delete the cached binary. Returns True if a file was removed."""
        with path_lock(self._cache_dir):
            path = self.binary_path
            if not path.exists():
                return False
            path.unlink()
            log.info("removed cached binary", path=str(path))
            return True

    def locate(self) -> Result[ToolLocation, BinaryUnavailable]:
        """Resolve the binary, downloading it if needed.

        Returns:
            Ok with ToolLocation, or Err with BinaryUnavailable
            (AcquisitionDeclined when the user says no)
        """
        with path_lock(self._cache_dir):
            name = self.binary_name
            if self._probe([name, *PRESENCE_ARGS]):
                log.debug("found on search path", command=name)
                return Ok(ToolLocation(command=name, source=LocationSource.SEARCH_PATH))

            cached = self.cached()
            if cached is not None:
                log.debug("found in cache", path=str(cached))
                return Ok(ToolLocation(command=str(cached), source=LocationSource.CACHE))

            return self._acquire()

    def _acquire(self) -> Result[ToolLocation, BinaryUnavailable]:
        url = self.download_url
        if not self._prompt.confirm_download(url):
            log.info("download declined", url=url)
            return Err(AcquisitionDeclined())

        dest = self.binary_path
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            message = f"Cannot create cache directory ({e})"
            error = WriteFailed(path=self._cache_dir, message=message)
            return Err(self._unavailable(error))

        self._prompt.download_started(url)
        fetched = self._downloader.fetch(url, dest)
        if isinstance(fetched, Err):
            return Err(self._unavailable(fetched.error))

        if not self._target.is_windows:
            try:
                make_executable(dest)
            except OSError as e:
                remove_quietly(dest)
                error = WriteFailed(path=dest, message=f"Cannot mark binary executable ({e})")
                return Err(self._unavailable(error))

        log.info("binary downloaded", path=str(dest), url=url)
        self._prompt.download_finished(dest)
        return Ok(ToolLocation(command=str(dest), source=LocationSource.DOWNLOADED))

    def _unavailable(self, cause: DownloadError) -> BinaryUnavailable:
        project = self._release.project.capitalize()
        return BinaryUnavailable(message=f"Failed to download {project}: {cause}", cause=cause)
