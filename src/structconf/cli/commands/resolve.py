"""Bind a configuration dataclass and show where each value came from."""

from __future__ import annotations

import os
from typing import Annotated, Any

import typer
from rich.table import Table

from structconf.binder import init
from structconf.cli.common import (
    EnvPrefixOption,
    PrefixOption,
    TargetArgument,
    console,
    exit_error,
    load_config_type,
)
from structconf.exceptions import StructconfError
from structconf.models import BindContext, BindResult, Source

_SOURCE_STYLES = {
    Source.FLAG: "magenta",
    Source.ENV: "green",
    Source.DEFAULT: "blue",
    Source.NONE: "dim",
}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "-"
    return str(value)


def _render(result: BindResult, title: str) -> None:
    table = Table(title=title, show_lines=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_column("Source", justify="center")
    table.add_column("Flag", style="dim")
    table.add_column("Env", style="dim")

    for binding in result.bindings:
        style = _SOURCE_STYLES[binding.source]
        table.add_row(
            binding.path,
            _format_value(binding.value),
            f"[{style}]{binding.source.value}[/]",
            f"-{binding.flag}",
            binding.env,
        )
    console.print(table)
    if result.args:
        console.print(f"\n[dim]Remaining arguments: {' '.join(result.args)}[/]")


def resolve(
    target: TargetArgument,
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Arguments to bind, given after '--'."),
    ] = None,
    prefix: PrefixOption = "",
    env_prefix: EnvPrefixOption = "",
    strict_bool: Annotated[
        bool,
        typer.Option("--strict-bool", help="Fail on malformed booleans instead of using false."),
    ] = False,
) -> None:
    """Bind the dataclass against the environment and the given arguments.

    Examples:
        # Values from the environment and defaults
        structconf resolve myapp.settings:Config --env-prefix MYAPP

        # Command-line flags go after '--'
        structconf resolve myapp.settings:Config -- -db-port 5433 -debug
    """
    config_type = load_config_type(target)

    try:
        config = config_type()
    except TypeError as exc:
        exit_error(f"Cannot create {config_type.__name__} with defaults: {exc}")

    context = BindContext(
        env_prefix=env_prefix,
        args=tuple(args or ()),
        environ=os.environ,
        strict_bool=strict_bool,
        program=config_type.__name__,
    )

    try:
        result = init(config, prefix, context=context)
    except StructconfError as exc:
        exit_error(str(exc))

    _render(result, config_type.__name__)


__all__ = ["resolve"]
