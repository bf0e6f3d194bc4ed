"""Tests for anemos_ext.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from anemos_ext.core.errors import ErrorCode
from anemos_ext.output.console import MockConsole, Style
from anemos_ext.output.errors import print_tool_error, tool_error_exit_code
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

URL = "https://github.com/ohayocorp/anemos/releases/latest/download/anemos-linux-amd64"


class TestPrintToolError:
    """Tests for print_tool_error()."""

    def test_declined(self) -> None:
        console = MockConsole()

        print_tool_error(AcquisitionDeclined(), console)

        assert console.messages[0] == "error: Anemos binary not found and download was declined."
        assert console.count(Style.DIM) == 1

    def test_not_found_hint(self) -> None:
        console = MockConsole()
        error = BinaryUnavailable(
            message="Failed to download Anemos: Failed to download: 404",
            cause=DownloadFailed(URL, 404),
        )

        print_tool_error(error, console)

        assert console.count(Style.ERROR) == 1
        assert "config" in console.outputs[1].message

    def test_network_error_no_hint(self) -> None:
        console = MockConsole()
        error = BinaryUnavailable(message="Failed", cause=NetworkError(URL, "refused"))

        print_tool_error(error, console)

        assert console.messages == ["error: Failed"]

    def test_invocation_shows_stderr(self) -> None:
        console = MockConsole()
        error = ToolInvocationFailed(("anemos", "--version"), 1, "unknown flag\n")

        print_tool_error(error, console)

        assert console.messages == [
            "error: anemos --version failed (exit 1): unknown flag",
            "unknown flag",
        ]

    def test_write_failed(self, tmp_path: Path) -> None:
        console = MockConsole()

        print_tool_error(WriteFailed(tmp_path, "Cannot write version record"), console)

        assert console.messages == [f"error: Cannot write version record: {tmp_path}"]


class TestToolErrorExitCode:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (AcquisitionDeclined(), ErrorCode.USER_ERROR),
            (BinaryUnavailable("x", DownloadFailed(URL, 500)), ErrorCode.NETWORK_ERROR),
            (BinaryUnavailable("x", NetworkError(URL, "reset")), ErrorCode.NETWORK_ERROR),
            (BinaryUnavailable("x", TooManyRedirects(URL, 5)), ErrorCode.NETWORK_ERROR),
            (BinaryUnavailable("x", WriteFailed(Path("/cache"), "denied")), ErrorCode.IO_ERROR),
            (BinaryUnavailable("x"), ErrorCode.ENV_ERROR),
            (ToolInvocationFailed(("anemos", "build"), 2, ""), ErrorCode.TOOL_ERROR),
            (WriteFailed(Path("/types"), "denied"), ErrorCode.IO_ERROR),
        ],
    )
    def test_mapping(self, error: SyncError, code: ErrorCode) -> None:
        assert tool_error_exit_code(error) == int(code)
