"""Error values for tool resolution, download and declaration sync.

Errors are plain frozen dataclasses carried in ``Err``. Match on them with
``match``/``case``; put ``AcquisitionDeclined`` before ``BinaryUnavailable``
since it is a subtype.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from anemos_ext.platform.process import ProcessError

__all__ = [
    "AcquisitionDeclined",
    "BinaryUnavailable",
    "DownloadError",
    "DownloadFailed",
    "NetworkError",
    "SyncError",
    "ToolInvocationFailed",
    "TooManyRedirects",
    "WriteFailed",
]


@dataclass(frozen=True, slots=True)
class DownloadFailed:
    """Terminal HTTP status outside 2xx."""

    url: str
    status: int

    def __str__(self) -> str:
        return f"Failed to download: {self.status} ({self.url})"


@dataclass(frozen=True, slots=True)
class NetworkError:
    """Transport-level failure: DNS, connection, TLS, interrupted stream."""

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class TooManyRedirects:
    url: str
    limit: int

    def __str__(self) -> str:
        return f"More than {self.limit} redirects ({self.url})"


@dataclass(frozen=True, slots=True)
class WriteFailed:
    """Local filesystem write failed."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


DownloadError = DownloadFailed | NetworkError | TooManyRedirects | WriteFailed


@dataclass(frozen=True, slots=True)
class BinaryUnavailable:
    """No usable binary: search path, cache and acquisition all failed.

    Attributes:
        message: Human-readable summary
        cause: The download error behind the failure, if any
    """

    message: str
    cause: DownloadError | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class AcquisitionDeclined(BinaryUnavailable):
    """The user did not consent to the download."""

    message: str = "User did not consent to download Anemos binary."


@dataclass(frozen=True, slots=True)
class ToolInvocationFailed:
    """The anemos binary exited non-zero or could not be started."""

    command: tuple[str, ...]
    returncode: int
    stderr: str

    @classmethod
    def from_process(cls, error: ProcessError) -> ToolInvocationFailed:
        return cls(command=error.command, returncode=error.returncode, stderr=error.stderr)

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
        suffix = f": {detail}" if detail else ""
        return f"{cmd_str} failed (exit {self.returncode}){suffix}"


SyncError = BinaryUnavailable | ToolInvocationFailed | WriteFailed
