from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from anemos_ext.core.config import Config, load_config
from anemos_ext.core.errors import ErrorCode
from anemos_ext.core.result import Err
from anemos_ext.output.console import ConsoleProtocol, RichConsole
from anemos_ext.platform.detection import PlatformTarget, detect_target
from anemos_ext.platform.paths import user_config_dir
from anemos_ext.services.host import AnemosHost, ConsolePrompt, HostPaths

CONFIG_ENV = "ANEMOS_EXT_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    target: PlatformTarget
    paths: HostPaths
    console: ConsoleProtocol

    def host(self, *, assume_yes: bool = False) -> AnemosHost:
        def confirm(question: str) -> bool:
            if assume_yes:
                return True
            return typer.confirm(question, default=False)

        return AnemosHost(
            config=self.config,
            target=self.target,
            console=self.console,
            prompt=ConsolePrompt(self.console, confirm),
            paths=self.paths,
        )


def config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return user_config_dir() / "config.toml"


def build_context() -> CLIContext:
    path = config_path()
    config = Config()
    if path.exists():
        config_result = load_config(path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        config = config_result.value
    elif os.environ.get(CONFIG_ENV):
        typer.echo(f"error: config file not found: {path}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        config=config,
        target=detect_target(),
        paths=HostPaths.from_config(config),
        console=RichConsole(),
    )
