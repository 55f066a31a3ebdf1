"""Tests for __main__ entry point.

These tests verify that the CLI can be invoked through python -m structconf.
"""

from __future__ import annotations

import os
import subprocess
import sys
from unittest.mock import patch

# pylint: disable=import-outside-toplevel


def test_main_module_invocation() -> None:
    """Test that `python -m structconf --help` runs without errors."""
    env = os.environ.copy()
    env["PYTHONIOENCODING"] = "utf-8"

    result = subprocess.run(
        [sys.executable, "-m", "structconf", "--help"],
        capture_output=True,
        timeout=30,
        check=False,
        env=env,
    )
    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")

    assert result.returncode == 0, f"CLI failed: stdout={stdout!r}, stderr={stderr!r}"
    assert "structconf" in (stdout + stderr).lower()


def test_main_function_calls_app() -> None:
    """Test that main() calls the CLI app."""
    with patch("structconf.__main__.app") as mock_app:
        from structconf.__main__ import main

        main()
        mock_app.assert_called_once_with()
