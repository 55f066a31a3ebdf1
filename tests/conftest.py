"""Shared pytest fixtures for the structconf test suite."""

from __future__ import annotations

# Disable Rich colors and force wide terminal BEFORE any imports
# Rich checks these at import time
import os

os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"
os.environ["FORCE_COLOR"] = "0"
os.environ["COLUMNS"] = "200"  # Prevent text wrapping in CLI output

import textwrap
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest

from structconf.flags import FlagSet
from structconf.models import BindContext

# pylint: disable=redefined-outer-name


@pytest.fixture
def make_context() -> Callable[..., BindContext]:
    """Build a BindContext isolated from the real argv and environment."""

    def _make(
        args: Sequence[str] = (),
        environ: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> BindContext:
        return BindContext(args=tuple(args), environ=dict(environ or {}), program="test", **kwargs)

    return _make


@pytest.fixture
def flag_set() -> FlagSet:
    """Return an empty flag set."""
    return FlagSet("test")


SAMPLE_SETTINGS = '''
from dataclasses import dataclass, field
from datetime import timedelta

from structconf import Float32, setting


@dataclass
class Db:
    host: str = setting("localhost", help="database host")
    port: int = setting("5432")
    timeout: timedelta = setting("5s")


@dataclass
class Settings:
    name: str = setting("demo")
    debug: bool = setting("false")
    db: Db = field(default_factory=Db)


@dataclass
class Broken:
    ratio: Float32 = setting("0.5")


@dataclass
class NeedsArgs:
    value: int


def not_a_dataclass():
    return None
'''


@pytest.fixture
def sample_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable ``sample_settings`` module and return its name."""
    (tmp_path / "sample_settings.py").write_text(textwrap.dedent(SAMPLE_SETTINGS))
    monkeypatch.syspath_prepend(str(tmp_path))
    return "sample_settings"
