"""Shared helpers for the structconf command-line tool."""

from __future__ import annotations

from typing import Annotated, NoReturn

import typer
from rich.console import Console

from structconf.exceptions import TargetError
from structconf.targets import load_target

console = Console()

TargetArgument = Annotated[
    str,
    typer.Argument(help="Configuration dataclass as 'module.path:ClassName'."),
]
PrefixOption = Annotated[
    str,
    typer.Option("--prefix", "-p", help="Base prefix path (space-separated words)."),
]
EnvPrefixOption = Annotated[
    str,
    typer.Option("--env-prefix", "-e", help="Prefix put in front of every derived environment name."),
]


def exit_error(message: str, code: int = 1) -> NoReturn:
    """Print ``message`` in red and exit with ``code``."""
    console.print(f"[red]{message}[/]")
    raise typer.Exit(code=code)


def load_config_type(target: str) -> type:
    """Import the configuration dataclass or exit with an error."""
    try:
        return load_target(target)
    except TargetError as exc:
        exit_error(str(exc))


__all__ = [
    "EnvPrefixOption",
    "PrefixOption",
    "TargetArgument",
    "console",
    "exit_error",
    "load_config_type",
]
