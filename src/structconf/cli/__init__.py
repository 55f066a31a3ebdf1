"""Command-line tool for structconf."""

from structconf.cli.app import app

__all__ = ["app"]
