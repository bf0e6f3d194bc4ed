"""Error presentation utilities.

One summarizing message per failure, plus an optional dim hint, and a
stable exit code for each error kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from anemos_ext.core.errors import ErrorCode
from anemos_ext.output.console import Style
from anemos_ext.tools.errors import (
    AcquisitionDeclined,
    BinaryUnavailable,
    DownloadFailed,
    NetworkError,
    SyncError,
    ToolInvocationFailed,
    TooManyRedirects,
    WriteFailed,
)

if TYPE_CHECKING:
    from anemos_ext.output.console import ConsoleProtocol

__all__ = ["print_tool_error", "tool_error_exit_code"]


def print_tool_error(error: SyncError, console: ConsoleProtocol) -> None:
    """Print a resolution or sync error with formatting."""
    match error:
        case AcquisitionDeclined():
            console.error("Anemos binary not found and download was declined.")
            console.print("hint: install anemos on PATH or rerun with --yes", Style.DIM)
        case BinaryUnavailable(message=message, cause=cause):
            console.error(message)
            if isinstance(cause, DownloadFailed) and cause.status == 404:
                console.print("hint: check [release] org/project/version in config", Style.DIM)
        case ToolInvocationFailed(stderr=stderr):
            console.error(str(error))
            if stderr.strip():
                console.print(stderr.strip(), Style.DIM)
        case WriteFailed():
            console.error(str(error))


def tool_error_exit_code(error: SyncError) -> int:
    """Get exit code for a resolution or sync error."""
    match error:
        case AcquisitionDeclined():
            return int(ErrorCode.USER_ERROR)
        case BinaryUnavailable(cause=DownloadFailed() | NetworkError() | TooManyRedirects()):
            return int(ErrorCode.NETWORK_ERROR)
        case BinaryUnavailable(cause=WriteFailed()):
            return int(ErrorCode.IO_ERROR)
        case BinaryUnavailable():
            return int(ErrorCode.ENV_ERROR)
        case ToolInvocationFailed():
            return int(ErrorCode.TOOL_ERROR)
        case WriteFailed():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.ENV_ERROR)
