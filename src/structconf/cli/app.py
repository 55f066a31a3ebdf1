"""Typer application for the structconf command-line tool."""

from __future__ import annotations

from typing import Annotated

import typer

from structconf import meta
from structconf.cli.commands.describe import describe
from structconf.cli.commands.resolve import resolve
from structconf.cli.common import console

app = typer.Typer(
    name=meta.__app_name__,
    help=f"{meta.__app_name__}: {meta.__description__}",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{meta.__app_name__} {meta.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Inspect and resolve structconf configuration dataclasses."""


app.command("describe")(describe)
app.command("resolve")(resolve)


__all__ = ["app"]
