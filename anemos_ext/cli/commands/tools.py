from __future__ import annotations

import typer

from anemos_ext.cli.commands._helpers import exit_on_error
from anemos_ext.cli.context import build_context
from anemos_ext.core.result import Ok


def locate(
    yes: bool = typer.Option(False, "--yes", "-y", help="Download without asking."),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Delete the cached binary first (a copy on PATH still wins).",
    ),
) -> None:
    """Print the anemos binary to use, downloading it if needed."""
    ctx = build_context()
    host = ctx.host(assume_yes=yes)
    if refresh and host.resolver.remove_cached():
        ctx.console.info(f"removed {host.resolver.binary_path}")

    result = host.locate()
    exit_on_error(result, ctx)
    if isinstance(result, Ok):
        typer.echo(result.value.command)


def url() -> None:
    """Print the release URL for this platform."""
    ctx = build_context()
    typer.echo(ctx.host().resolver.download_url)
