"""Tests for the structconf.naming module."""

from __future__ import annotations

from dataclasses import dataclass, fields

import pytest

from structconf.models import setting
from structconf.naming import env_name, flag_name, join_strings, nested_prefix


@dataclass
class _Names:
    Test: str = ""
    WithFlag: str = setting("10", flag="test-flag")
    WithEnv: str = setting("10", env="TEST_ENV")
    max_conns: int = 0


def _field(name: str):
    return next(f for f in fields(_Names) if f.name == name)


# ============================================================================
# join_strings / nested_prefix tests
# ============================================================================


class TestJoinStrings:
    """Tests for join_strings function."""

    @pytest.mark.parametrize(
        ("separator", "parts", "expected"),
        [
            ("-", ("a", "b", "c"), "a-b-c"),
            ("_", ("", "b", "c"), "b_c"),
            ("#", ("", "", ""), ""),
            ("-", ("a", "", "c"), "a-c"),
            ("-", (), ""),
        ],
    )
    def test_join(self, separator: str, parts: tuple[str, ...], expected: str) -> None:
        """Skip empty parts and keep order."""
        assert join_strings(separator, *parts) == expected


class TestNestedPrefix:
    """Tests for nested_prefix function."""

    def test_empty_base(self) -> None:
        """Return the next name alone."""
        assert nested_prefix("", "abc") == "abc"

    def test_not_empty_base(self) -> None:
        """Join base and next name with a space."""
        assert nested_prefix("abc", "def") == "abc def"


# ============================================================================
# flag_name tests
# ============================================================================


class TestFlagName:
    """Tests for flag_name function."""

    def test_default_flag_name(self) -> None:
        """Lower-case prefix and field name joined with a dash."""
        assert flag_name(_field("Test"), "Db") == "db-test"

    def test_provided_flag(self) -> None:
        """Use the override verbatim."""
        assert flag_name(_field("WithFlag"), "Db") == "test-flag"

    def test_empty_prefix(self) -> None:
        """No leading dash without prefix."""
        assert flag_name(_field("Test"), "") == "test"

    def test_multi_word_prefix(self) -> None:
        """Each prefix word becomes one segment."""
        assert flag_name(_field("Test"), "Server Db") == "server-db-test"

    def test_underscores_become_dashes(self) -> None:
        """Snake case field names turn into dashed flags."""
        assert flag_name(_field("max_conns"), "db") == "db-max-conns"


# ============================================================================
# env_name tests
# ============================================================================


class TestEnvName:
    """Tests for env_name function."""

    def test_default_env_name(self) -> None:
        """Upper-case env prefix, prefix and field name joined with underscores."""
        assert env_name(_field("Test"), "Db", "TEST") == "TEST_DB_TEST"

    def test_provided_env(self) -> None:
        """Use the override verbatim."""
        assert env_name(_field("WithEnv"), "Db", "TEST") == "TEST_ENV"

    def test_without_env_prefix(self) -> None:
        """Drop the empty env prefix."""
        assert env_name(_field("Test"), "Db") == "DB_TEST"

    def test_env_prefix_kept_verbatim(self) -> None:
        """The env prefix is used as given, only derived words are upper-cased."""
        assert env_name(_field("max_conns"), "db", "app") == "app_DB_MAX_CONNS"
        assert env_name(_field("max_conns"), "db", "APP") == "APP_DB_MAX_CONNS"

    def test_no_prefix_at_all(self) -> None:
        """Field name alone."""
        assert env_name(_field("Test"), "") == "TEST"
