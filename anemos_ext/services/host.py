"""Host integration: the thin layer between a host and the tools core.

AnemosHost wires config, platform and console into a ToolResolver and a
DeclarationSynchronizer, and exposes the three things a host does:
activate at startup, sync declarations, and run a build.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from anemos_ext.core.config import Config
from anemos_ext.core.logging import get_logger
from anemos_ext.core.result import Err, Ok, Result
from anemos_ext.output.console import ConsoleProtocol
from anemos_ext.platform import process
from anemos_ext.platform.detection import PlatformTarget
from anemos_ext.platform.paths import user_cache_dir
from anemos_ext.tools.declarations import DeclarationSynchronizer, SyncOutcome, types_dir
from anemos_ext.tools.download import Downloader
from anemos_ext.tools.errors import BinaryUnavailable, SyncError, ToolInvocationFailed
from anemos_ext.tools.http import HttpClient, RealHttpClient
from anemos_ext.tools.release import ReleaseSource
from anemos_ext.tools.resolver import AcquisitionPrompt, ToolLocation, ToolResolver

__all__ = ["AnemosHost", "ConsolePrompt", "HostPaths", "CACHE_DIR_ENV"]

log = get_logger(__name__)

CACHE_DIR_ENV = "ANEMOS_EXT_CACHE_DIR"

ACTIVATION_WARNING = (
    "Anemos binary not found and could not be downloaded. Some features may not work."
)
RESTART_HINT = "Type declarations regenerated; restart the TypeScript server to pick them up."
DEFAULT_ENTRY = "index.js"


@dataclass(frozen=True, slots=True)
class HostPaths:
    """Filesystem locations owned by the host.

    Attributes:
        cache_dir: Where the downloaded binary lives
        install_root: Directory whose node_modules holds the types plugin
    """

    cache_dir: Path
    install_root: Path

    @property
    def types_dir(self) -> Path:
        return types_dir(self.install_root)

    @classmethod
    def from_config(cls, config: Config, cwd: Path | None = None) -> HostPaths:
        """Resolve paths: environment, then config, then platform defaults."""
        env_cache = os.environ.get(CACHE_DIR_ENV)
        if env_cache:
            cache_dir = Path(env_cache).expanduser()
        elif config.paths.cache_dir:
            cache_dir = Path(config.paths.cache_dir).expanduser()
        else:
            cache_dir = user_cache_dir()

        if config.paths.install_root:
            install_root = Path(config.paths.install_root).expanduser()
        else:
            install_root = cwd if cwd is not None else Path.cwd()

        return cls(cache_dir=cache_dir.absolute(), install_root=install_root.absolute())


class ConsolePrompt:
    """AcquisitionPrompt backed by a console and a yes/no question."""

    def __init__(self, console: ConsoleProtocol, confirm: Callable[[str], bool]) -> None:
        self._console = console
        self._confirm = confirm

    def confirm_download(self, url: str) -> bool:
        source = _source_name(url)
        question = f"Anemos binary not found. Would you like to download it from {source}?"
        return self._confirm(question)

    def download_started(self, url: str) -> None:
        self._console.info(f"Downloading Anemos binary from {_source_name(url)}...")

    def download_finished(self, path: Path) -> None:
        self._console.success("Anemos binary downloaded successfully.")


class AnemosHost:
    """Startup, sync and build flows for one host process."""

    def __init__(
        self,
        *,
        config: Config,
        target: PlatformTarget,
        console: ConsoleProtocol,
        prompt: AcquisitionPrompt,
        paths: HostPaths,
        http: HttpClient | None = None,
        probe: Callable[[list[str]], bool] = process.probe,
        run: Callable[..., Result[str, process.ProcessError]] = process.run,
        notify: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._paths = paths

        client = http if http is not None else RealHttpClient(timeout=config.download.timeout)
        self._resolver = ToolResolver(
            cache_dir=paths.cache_dir,
            target=target,
            release=ReleaseSource.from_config(config.release),
            downloader=Downloader(client, max_redirects=config.download.max_redirects),
            prompt=prompt,
            probe=probe,
        )
        self._synchronizer = DeclarationSynchronizer(
            self._resolver,
            paths.types_dir,
            run=run,
            notify=notify if notify is not None else self._print_restart_hint,
            timeout=config.tool.timeout,
        )

    @property
    def resolver(self) -> ToolResolver:
        return self._resolver

    @property
    def synchronizer(self) -> DeclarationSynchronizer:
        return self._synchronizer

    @property
    def paths(self) -> HostPaths:
        return self._paths

    def locate(self) -> Result[ToolLocation, BinaryUnavailable]:
        return self._resolver.locate()

    def sync(self) -> Result[SyncOutcome, SyncError]:
        return self._synchronizer.ensure_up_to_date()

    def activate(self) -> bool:
        """Startup flow: make sure the binary and declarations are usable.

        Never raises. A missing binary shows one warning, preceded by the
        download error when a download was attempted; declaration sync
        failures are only logged.

        Returns:
            True if the binary was found and declarations are current
        """
        located = self._resolver.locate()
        if isinstance(located, Err):
            log.warning("activation: binary unavailable", error=str(located.error))
            if located.error.cause is not None:
                self._console.error(str(located.error))
            self._console.warning(ACTIVATION_WARNING)
            return False

        try:
            synced = self._synchronizer.ensure_up_to_date()
        except Exception:
            log.exception("activation: declaration sync crashed")
            return False

        if isinstance(synced, Err):
            log.warning("activation: declarations not synced", error=str(synced.error))
            return False

        log.info("activation complete", tool=str(located.value), declarations=str(synced.value))
        return True

    def build(
        self,
        workspace_root: Path,
        entry: str = DEFAULT_ENTRY,
    ) -> Result[None, SyncError]:
        """Run `anemos build <entry>` in workspace_root, streaming output."""
        located = self._resolver.locate()
        if isinstance(located, Err):
            return located

        cmd = located.value.argv("build", entry)
        log.info("running build", cwd=str(workspace_root), entry=entry)
        result = process.run_silent(cmd, cwd=workspace_root)
        if isinstance(result, Err):
            return Err(ToolInvocationFailed.from_process(result.error))
        return Ok(None)

    def _print_restart_hint(self) -> None:
        self._console.info(RESTART_HINT)


def _source_name(url: str) -> str:
    """Display name of the release host: "GitHub" or the bare hostname."""
    host = urlsplit(url).hostname or url
    return "GitHub" if host == "github.com" else host
