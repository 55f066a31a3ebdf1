"""Tests for CLI application.

These tests verify that the describe and resolve commands work correctly.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from structconf import meta
from structconf.cli.app import app

# Mark all tests in this module as CLI tests
# Run with: pytest -m cli
pytestmark = pytest.mark.cli

runner = CliRunner()


def test_app_help() -> None:
    """Test that --help lists the commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "describe" in result.stdout
    assert "resolve" in result.stdout


def test_app_version() -> None:
    """Test that --version displays the version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert meta.__version__ in result.stdout


class TestDescribe:
    """Tests for the describe command."""

    def test_lists_fields(self, sample_module: str) -> None:
        """Every field is shown with its flag and environment name."""
        result = runner.invoke(app, ["describe", f"{sample_module}:Settings", "--env-prefix", "APP"])
        assert result.exit_code == 0
        assert "db.host" in result.stdout
        assert "-db-port" in result.stdout
        assert "APP_DB_TIMEOUT" in result.stdout
        assert "5432" in result.stdout
        assert "5 field(s)" in result.stdout

    def test_prefix(self, sample_module: str) -> None:
        """The base prefix shapes flag names."""
        result = runner.invoke(app, ["describe", f"{sample_module}:Settings", "-p", "svc"])
        assert result.exit_code == 0
        assert "-svc-db-port" in result.stdout
        assert "SVC_DB_PORT" in result.stdout

    def test_unsupported(self, sample_module: str) -> None:
        """Unsupported kinds are marked instead of failing."""
        result = runner.invoke(app, ["describe", f"{sample_module}:Broken"])
        assert result.exit_code == 0
        assert "unsupported" in result.stdout

    def test_bad_target(self) -> None:
        """Malformed targets exit with an error."""
        result = runner.invoke(app, ["describe", "no-colon"])
        assert result.exit_code == 1
        assert "invalid target" in result.stdout

    def test_not_a_dataclass(self, sample_module: str) -> None:
        """Targets must name a dataclass."""
        result = runner.invoke(app, ["describe", f"{sample_module}:not_a_dataclass"])
        assert result.exit_code == 1
        assert "not a dataclass" in result.stdout


class TestResolve:
    """Tests for the resolve command."""

    def test_sources(self, sample_module: str) -> None:
        """Values come from flags, environment and defaults."""
        result = runner.invoke(
            app,
            ["resolve", f"{sample_module}:Settings", "--env-prefix", "SCTEST", "--", "-db-port", "6000"],
            env={"SCTEST_DB_HOST": "db.internal"},
        )
        assert result.exit_code == 0, result.stdout
        assert "6000" in result.stdout
        assert "db.internal" in result.stdout
        assert "flag" in result.stdout
        assert "env" in result.stdout
        assert "default" in result.stdout

    def test_remaining_arguments(self, sample_module: str) -> None:
        """Positional arguments after the flags are listed."""
        result = runner.invoke(
            app,
            ["resolve", f"{sample_module}:Settings", "-e", "SCTEST", "--", "-name", "x", "serve"],
        )
        assert result.exit_code == 0, result.stdout
        assert "Remaining arguments: serve" in result.stdout

    def test_bad_value(self, sample_module: str) -> None:
        """Malformed values exit with an error."""
        result = runner.invoke(
            app,
            ["resolve", f"{sample_module}:Settings", "-e", "SCTEST"],
            env={"SCTEST_DB_PORT": "not-a-port"},
        )
        assert result.exit_code == 1
        assert "cannot use 'not-a-port'" in result.stdout

    def test_unsupported(self, sample_module: str) -> None:
        """Unsupported kinds fail when binding."""
        result = runner.invoke(app, ["resolve", f"{sample_module}:Broken", "-e", "SCTEST"])
        assert result.exit_code == 1
        assert "unsupported type: float32" in result.stdout

    def test_needs_arguments(self, sample_module: str) -> None:
        """Dataclasses that need constructor arguments are rejected."""
        result = runner.invoke(app, ["resolve", f"{sample_module}:NeedsArgs"])
        assert result.exit_code == 1
        assert "Cannot create NeedsArgs" in result.stdout

    def test_missing_module(self) -> None:
        """Unknown modules exit with an error."""
        result = runner.invoke(app, ["resolve", "structconf_no_such_module:Config"])
        assert result.exit_code == 1
        assert "cannot import" in result.stdout
