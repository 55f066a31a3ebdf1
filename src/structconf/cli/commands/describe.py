"""List the flags and environment variables of a configuration dataclass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from structconf.cli.common import (
    EnvPrefixOption,
    PrefixOption,
    TargetArgument,
    console,
    exit_error,
    load_config_type,
)
from structconf.exceptions import StructconfError
from structconf.walker import describe as describe_fields

if TYPE_CHECKING:
    from structconf.models import FieldInfo


def _create_table(title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("Field", style="cyan")
    table.add_column("Flag", style="green")
    table.add_column("Env")
    table.add_column("Type", justify="center")
    table.add_column("Default", style="dim")
    table.add_column("Required", justify="center")
    return table


def _add_row(table: Table, info: FieldInfo) -> None:
    kind = info.kind if info.supported else f"[red]{info.kind} (unsupported)[/]"
    table.add_row(
        info.path,
        f"-{info.flag}",
        info.env,
        kind,
        info.default if info.default is not None else "-",
        "[yellow]yes[/]" if info.required else "",
    )


def describe(
    target: TargetArgument,
    prefix: PrefixOption = "",
    env_prefix: EnvPrefixOption = "",
) -> None:
    """Show the flag, environment variable and default of every field.

    Examples:
        # List the settings of a dataclass
        structconf describe myapp.settings:Config

        # With the prefixes used by the application
        structconf describe myapp.settings:Config --prefix db --env-prefix MYAPP
    """
    config_type = load_config_type(target)

    try:
        infos = describe_fields(config_type, prefix, env_prefix=env_prefix)
    except StructconfError as exc:
        exit_error(str(exc))

    if not infos:
        console.print(f"[yellow]{config_type.__name__} has no bindable fields.[/]")
        return

    table = _create_table(config_type.__name__)
    for info in infos:
        _add_row(table, info)
    console.print(table)

    unsupported = sum(1 for info in infos if not info.supported)
    summary = f"\n[dim]{len(infos)} field(s)"
    if unsupported:
        summary += f", [red]{unsupported} unsupported[/red]"
    console.print(summary + "[/dim]")


__all__ = ["describe"]
