from __future__ import annotations

from pathlib import Path

import typer

from anemos_ext.cli.commands._helpers import exit_on_error
from anemos_ext.cli.context import build_context
from anemos_ext.core.errors import ErrorCode
from anemos_ext.core.result import Err
from anemos_ext.tools.errors import BinaryUnavailable


def build(
    entry: str = typer.Argument("index.js", help="Entry file passed to anemos build."),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root (default: current directory).",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Download without asking."),
) -> None:
    """Run `anemos build` in the workspace root."""
    ctx = build_context()
    root = (workspace or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        ctx.console.error(f"workspace is not a directory: {root}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    result = ctx.host(assume_yes=yes).build(root, entry)
    if isinstance(result, Err) and isinstance(result.error, BinaryUnavailable):
        ctx.console.error("Failed to find or download Anemos binary.")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    exit_on_error(result, ctx)
