from __future__ import annotations

import typer

from anemos_ext.cli.commands._helpers import exit_on_error
from anemos_ext.cli.context import build_context
from anemos_ext.core.errors import ErrorCode
from anemos_ext.core.result import Ok


def sync(
    yes: bool = typer.Option(False, "--yes", "-y", help="Download without asking."),
) -> None:
    """Regenerate type declarations if the anemos version changed."""
    ctx = build_context()
    result = ctx.host(assume_yes=yes).sync()
    exit_on_error(result, ctx)
    if isinstance(result, Ok):
        ctx.console.success(f"declarations {result.value}")


def activate(
    yes: bool = typer.Option(False, "--yes", "-y", help="Download without asking."),
) -> None:
    """Startup check: locate the binary and sync declarations (best effort)."""
    ctx = build_context()
    if not ctx.host(assume_yes=yes).activate():
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
