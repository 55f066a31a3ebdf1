"""Flag and environment variable name derivation.

A field's flag key is its name lower-cased, underscores turned into dashes,
behind the lower-cased words of the prefix path, all joined with ``-``. Its
environment key is the env prefix as given, then the upper-cased prefix
words and field name, joined with ``_``. An explicit ``flag`` / ``env`` metadata entry replaces the
derived name verbatim.

The prefix path is the space-separated list of struct names walked so far
(see :func:`nested_prefix`); each word becomes one segment of the key.

Examples:
    >>> from dataclasses import dataclass, fields
    >>> @dataclass
    ... class Db:
    ...     max_conns: int = 0
    >>> f = fields(Db)[0]
    >>> flag_name(f, "Db")
    'db-max-conns'
    >>> env_name(f, "Db", "APP")
    'APP_DB_MAX_CONNS'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structconf.models import ENV_KEY, FLAG_KEY

if TYPE_CHECKING:
    from dataclasses import Field
    from typing import Any

FLAG_SEPARATOR = "-"
ENV_SEPARATOR = "_"
PREFIX_SEPARATOR = " "


def join_strings(separator: str, *parts: str) -> str:
    """Join the non-empty ``parts`` with ``separator``.

    Examples:
        >>> join_strings("-", "a", "b", "c")
        'a-b-c'
        >>> join_strings("_", "", "b", "c")
        'b_c'
        >>> join_strings("#", "", "", "")
        ''
    """
    return separator.join(part for part in parts if part)


def nested_prefix(base: str, next_name: str) -> str:
    """Extend the prefix path ``base`` with ``next_name``.

    Examples:
        >>> nested_prefix("", "abc")
        'abc'
        >>> nested_prefix("abc", "def")
        'abc def'
    """
    if not base:
        return next_name
    return base + PREFIX_SEPARATOR + next_name


def _prefix_words(prefix: str) -> list[str]:
    return prefix.split()


def flag_name(field: Field[Any], prefix: str) -> str:
    """Return the flag key of ``field`` under ``prefix``.

    Args:
        field: Dataclass field.
        prefix: Prefix path of the struct holding the field.

    Returns:
        The ``flag`` metadata value when present, otherwise the derived key.

    Examples:
        >>> from dataclasses import dataclass, fields
        >>> @dataclass
        ... class Db:
        ...     Test: str = ""
        >>> flag_name(fields(Db)[0], "Db")
        'db-test'
    """
    override = field.metadata.get(FLAG_KEY)
    if override:
        return override
    words = [word.lower().replace("_", FLAG_SEPARATOR) for word in (*_prefix_words(prefix), field.name)]
    return join_strings(FLAG_SEPARATOR, *words)


def env_name(field: Field[Any], prefix: str, env_prefix: str = "") -> str:
    """Return the environment variable name of ``field`` under ``prefix``.

    Args:
        field: Dataclass field.
        prefix: Prefix path of the struct holding the field.
        env_prefix: Application-wide prefix put in front of derived names,
            used verbatim.

    Returns:
        The ``env`` metadata value when present, otherwise the derived name.

    Examples:
        >>> from dataclasses import dataclass, fields
        >>> @dataclass
        ... class Db:
        ...     Test: str = ""
        >>> env_name(fields(Db)[0], "Db", "TEST")
        'TEST_DB_TEST'
    """
    override = field.metadata.get(ENV_KEY)
    if override:
        return override
    words = [word.upper() for word in (*_prefix_words(prefix), field.name)]
    return join_strings(ENV_SEPARATOR, env_prefix, *words)


__all__ = [
    "ENV_SEPARATOR",
    "FLAG_SEPARATOR",
    "PREFIX_SEPARATOR",
    "env_name",
    "flag_name",
    "join_strings",
    "nested_prefix",
]
