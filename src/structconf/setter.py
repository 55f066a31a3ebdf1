"""Typed value setting for bound fields.

:func:`set_value` parses a source string with the field's kind, stores the
result and registers the field's command-line flag, so that a later
:meth:`FlagSet.parse` can still override the value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from structconf.exceptions import CannotUseValueError
from structconf.kinds import Kind, parser_for, zero_value

if TYPE_CHECKING:
    from structconf.flags import FlagSet
    from structconf.models import Binding

logger = logging.getLogger(__name__)


def set_value(
    binding: Binding,
    flag_set: FlagSet,
    flag_key: str,
    value: str,
    *,
    strict_bool: bool = False,
    help: str | None = None,  # noqa: A002  # pylint: disable=redefined-builtin
) -> None:
    """Parse ``value`` into the field behind ``binding`` and register its flag.

    Args:
        binding: Field to set.
        flag_set: Flag set the field's flag is registered on.
        flag_key: Key of the field's flag.
        value: Source string.
        strict_bool: Raise on a malformed boolean instead of storing ``False``.
        help: Help text of the flag.

    Raises:
        UnsupportedTypeError: If the field's kind has no coercion rule; the
            field is left untouched.
        CannotUseValueError: If ``value`` does not parse; the field is left
            untouched.
        FlagRedefinedError: If ``flag_key`` is already registered.

    Examples:
        >>> from dataclasses import dataclass
        >>> from structconf.flags import FlagSet
        >>> from structconf.models import Binding
        >>> @dataclass
        ... class Cfg:
        ...     port: int = 0
        >>> cfg = Cfg()
        >>> set_value(Binding(cfg, "port", Kind.INT), FlagSet(), "port", "8080")
        >>> cfg.port
        8080
    """
    kind = binding.kind
    parse = parser_for(kind)
    try:
        parsed = parse(value)
    except ValueError:
        if kind is not Kind.BOOL or strict_bool:
            raise CannotUseValueError(value, zero_value(kind), kind.value) from None
        logger.warning("Cannot use %r as bool for '%s', falling back to false", value, flag_key)
        parsed = False

    binding.set(parsed)
    flag_set.register(flag_key, binding, help=help)


def register_flag(
    binding: Binding,
    flag_set: FlagSet,
    flag_key: str,
    *,
    help: str | None = None,  # noqa: A002  # pylint: disable=redefined-builtin
) -> None:
    """Register the flag of a field that received no source value.

    The field keeps its current value, which becomes the flag's displayed
    default.

    Raises:
        UnsupportedTypeError: If the field's kind has no coercion rule.
        FlagRedefinedError: If ``flag_key`` is already registered.
    """
    flag_set.register(flag_key, binding, help=help)


__all__ = [
    "register_flag",
    "set_value",
]
