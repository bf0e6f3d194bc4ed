"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from anemos_ext.core.result import Err, Result
from anemos_ext.output.errors import print_tool_error, tool_error_exit_code
from anemos_ext.tools.errors import SyncError

if TYPE_CHECKING:
    from anemos_ext.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, SyncError], ctx: CLIContext) -> None:
    """Print the error and exit if result is Err, otherwise return."""
    if isinstance(result, Err):
        print_tool_error(result.error, ctx.console)
        raise typer.Exit(code=tool_error_exit_code(result.error))
