"""Keep generated type declarations in step with the active anemos version.

One pass of ensure_up_to_date():

    locate tool -> query --version -> compare with version.json
        fresh:  done
        stale:  clear record -> anemos declarations <types_dir>
                -> write record -> notify downstream

The record is removed before regeneration and written atomically after
it, so a reader never sees a record that claims a version the
declarations on disk do not match.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Protocol

from anemos_ext.core.locks import path_lock
from anemos_ext.core.logging import get_logger
from anemos_ext.core.result import Err, Ok, Result
from anemos_ext.platform import process
from anemos_ext.platform.process import ProcessError
from anemos_ext.tools.errors import (
    BinaryUnavailable,
    SyncError,
    ToolInvocationFailed,
    WriteFailed,
)
from anemos_ext.tools.record import VersionRecord, clear_record, load_record, save_record
from anemos_ext.tools.resolver import ToolLocation

__all__ = [
    "DeclarationSynchronizer",
    "SyncOutcome",
    "needs_update",
    "types_dir",
    "TYPES_PACKAGE",
    "UNVERSIONED",
]

log = get_logger(__name__)

TYPES_PACKAGE = "anemos-typescript-plugin"
TYPES_DIRNAME = ".anemos-types"

# Development builds report this version; never trust a record for it.
UNVERSIONED = "0.0.0"


class SyncOutcome(Enum):
    UP_TO_DATE = "up_to_date"
    REGENERATED = "regenerated"

    def __str__(self) -> str:
        return self.value.replace("_", " ")


class Locator(Protocol):
    def locate(self) -> Result[ToolLocation, BinaryUnavailable]: ...


Runner = Callable[..., Result[str, ProcessError]]


def types_dir(install_root: Path) -> Path:
    """Generated declarations directory under the plugin package install."""
    return install_root / "node_modules" / TYPES_PACKAGE / TYPES_DIRNAME


def needs_update(record: VersionRecord | None, current_version: str) -> bool:
    if record is None:
        return True
    return record.version != current_version or current_version == UNVERSIONED


class DeclarationSynchronizer:
    """Regenerates declarations when the tool version changes.

    Args:
        locator: Anything with locate(), normally a ToolResolver
        types_dir: Directory the declarations are generated into
        run: Command runner returning stdout (injectable for tests)
        notify: Called after a regeneration, e.g. to restart a language server
        timeout: Per-invocation timeout in seconds (None waits forever)
    """

    def __init__(
        self,
        locator: Locator,
        types_dir: Path,
        *,
        run: Runner = process.run,
        notify: Callable[[], None] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._locator = locator
        self._types_dir = types_dir
        self._run = run
        self._notify = notify
        self._timeout = timeout

    @property
    def types_dir(self) -> Path:
        return self._types_dir

    def query_version(self, location: ToolLocation) -> Result[str, ToolInvocationFailed]:
        """Run `anemos --version` and return the trimmed output."""
        result = self._run(location.argv("--version"), timeout=self._timeout)
        if isinstance(result, Err):
            return Err(ToolInvocationFailed.from_process(result.error))

        version = result.value.strip()
        if not version:
            return Err(
                ToolInvocationFailed(
                    command=tuple(location.argv("--version")),
                    returncode=0,
                    stderr="no version printed",
                )
            )
        return Ok(version)

    def ensure_up_to_date(self) -> Result[SyncOutcome, SyncError]:
        """Regenerate declarations if the record is missing or stale."""
        with path_lock(self._types_dir):
            located = self._locator.locate()
            if isinstance(located, Err):
                log.warning("cannot sync declarations", error=str(located.error))
                return located
            location = located.value

            queried = self.query_version(location)
            if isinstance(queried, Err):
                # No known baseline: keep whatever is on disk for now.
                log.warning("tool version unknown, skipping regeneration", error=str(queried.error))
                return queried
            current = queried.value
            log.debug("detected tool version", version=current)

            record = load_record(self._types_dir)
            if not needs_update(record, current):
                log.info("declarations up to date", version=current)
                return Ok(SyncOutcome.UP_TO_DATE)

            log.info(
                "declarations need update",
                current=current,
                stored=record.version if record else None,
            )
            regenerated = self._regenerate(location, current)
            if isinstance(regenerated, Err):
                return regenerated

        self._notify_downstream()
        return Ok(SyncOutcome.REGENERATED)

    def _regenerate(self, location: ToolLocation, version: str) -> Result[None, SyncError]:
        try:
            clear_record(self._types_dir)
        except OSError as e:
            message = f"Cannot clear version record ({e})"
            return Err(WriteFailed(path=self._types_dir, message=message))

        cmd = location.argv("declarations", str(self._types_dir))
        log.info("generating declarations", types_dir=str(self._types_dir))
        result = self._run(cmd, timeout=self._timeout)
        if isinstance(result, Err):
            error = ToolInvocationFailed.from_process(result.error)
            log.warning("declaration generation failed", error=str(error))
            return Err(error)

        try:
            save_record(self._types_dir, VersionRecord.now(version))
        except OSError as e:
            message = f"Cannot write version record ({e})"
            return Err(WriteFailed(path=self._types_dir, message=message))

        log.info("updated version record", version=version)
        return Ok(None)

    def _notify_downstream(self) -> None:
        if self._notify is None:
            return
        try:
            self._notify()
        except Exception as e:
            log.warning("downstream notification failed", error=str(e))
