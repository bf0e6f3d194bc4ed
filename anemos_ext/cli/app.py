from __future__ import annotations

import os
from pathlib import Path

import typer

from anemos_ext import __version__
from anemos_ext.cli.commands.build import build
from anemos_ext.cli.commands.sync import activate, sync
from anemos_ext.cli.commands.tools import locate, url
from anemos_ext.cli.context import CONFIG_ENV
from anemos_ext.core.logging import setup_logging


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(locate)
app.command()(url)
app.command()(sync)
app.command()(activate)
app.command()(build)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic logs."),
) -> None:
    setup_logging(level="DEBUG" if verbose else "WARNING")

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser())


def main() -> None:
    app()
