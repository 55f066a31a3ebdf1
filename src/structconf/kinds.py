"""Scalar kinds and their textual parsing rules.

Every bindable field resolves to one :class:`Kind`. The kind-indexed table
``_PARSERS`` holds the parse function and the zero value of each supported
kind; a kind without an entry (``float32``) is recognised but unsupported.

Sized integer and float types are ``typing.NewType`` aliases so that a field
can declare the bit width it expects::

    @dataclass
    class Pool:
        size: Int16 = Int16(0)
        ratio: float = 0.0
"""

from __future__ import annotations

import datetime
import math
import re
import types
import typing
from collections.abc import Callable
from enum import Enum
from typing import Any, NewType

from structconf.exceptions import UnsupportedTypeError

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt = NewType("UInt", int)
UInt8 = NewType("UInt8", int)
UInt16 = NewType("UInt16", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)


class Kind(str, Enum):
    """Scalar kind of a bindable field."""

    DURATION = "duration"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    BOOL = "bool"


_ANNOTATION_KINDS: dict[Any, Kind] = {
    datetime.timedelta: Kind.DURATION,
    int: Kind.INT,
    Int8: Kind.INT8,
    Int16: Kind.INT16,
    Int32: Kind.INT32,
    Int64: Kind.INT64,
    UInt: Kind.UINT,
    UInt8: Kind.UINT8,
    UInt16: Kind.UINT16,
    UInt32: Kind.UINT32,
    UInt64: Kind.UINT64,
    Float32: Kind.FLOAT32,
    float: Kind.FLOAT64,
    str: Kind.STRING,
    bool: Kind.BOOL,
}

# Inclusive (min, max) per integer kind; int and uint are 64 bits wide.
_INT_BOUNDS: dict[Kind, tuple[int, int]] = {
    Kind.INT: (-(2**63), 2**63 - 1),
    Kind.INT8: (-(2**7), 2**7 - 1),
    Kind.INT16: (-(2**15), 2**15 - 1),
    Kind.INT32: (-(2**31), 2**31 - 1),
    Kind.INT64: (-(2**63), 2**63 - 1),
    Kind.UINT: (0, 2**64 - 1),
    Kind.UINT8: (0, 2**8 - 1),
    Kind.UINT16: (0, 2**16 - 1),
    Kind.UINT32: (0, 2**32 - 1),
    Kind.UINT64: (0, 2**64 - 1),
}

_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_PATTERN = re.compile(r"[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

#: Duration units in microseconds, the resolution of ``timedelta``.
DURATION_UNITS: dict[str, float] = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,  # U+00B5 micro sign
    "μs": 1.0,  # U+03BC greek mu
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}

_DURATION_PATTERN = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h))+")
_DURATION_COMPONENT = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")

# Durations are bounded by a signed 64-bit count of nanoseconds.
_MAX_DURATION_MICROS = (2**63 - 1) / 1e3


def parse_duration(text: str) -> datetime.timedelta:
    """Parse a duration string such as ``"3h"``, ``"1h30m"`` or ``"-1.5s"``.

    A duration is a possibly signed sequence of decimal numbers, each with a
    unit suffix (``ns``, ``us``, ``µs``, ``ms``, ``s``, ``m``, ``h``). The
    bare string ``"0"`` is accepted. Sub-microsecond parts are rounded.

    Args:
        text: Duration string.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the string is not a valid duration.

    Examples:
        >>> parse_duration("3h")
        datetime.timedelta(seconds=10800)
        >>> parse_duration("1m30s")
        datetime.timedelta(seconds=90)
        >>> parse_duration("0")
        datetime.timedelta(0)
    """
    if text in ("0", "+0", "-0"):
        return datetime.timedelta(0)
    if not _DURATION_PATTERN.fullmatch(text):
        raise ValueError(f"invalid duration {text!r}")

    sign = -1 if text.startswith("-") else 1
    body = text.lstrip("+-")
    micros = 0.0
    for number, unit in _DURATION_COMPONENT.findall(body):
        micros += float(number) * DURATION_UNITS[unit]
    if micros > _MAX_DURATION_MICROS:
        raise ValueError(f"invalid duration {text!r}: out of range")
    return datetime.timedelta(microseconds=sign * micros)


def _parse_int(kind: Kind) -> Callable[[str], int]:
    pattern = _UNSIGNED_PATTERN if kind.value.startswith("u") else _SIGNED_PATTERN
    low, high = _INT_BOUNDS[kind]

    def parse(text: str) -> int:
        if not pattern.fullmatch(text):
            raise ValueError(f"invalid {kind.value} syntax {text!r}")
        value = int(text, 10)
        if not low <= value <= high:
            raise ValueError(f"{text!r} out of range for {kind.value}")
        return value

    return parse


def _parse_float(text: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid float syntax {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"{text!r} out of range for float64")
    return value


def parse_bool(text: str) -> bool:
    """Parse a boolean literal.

    Accepts ``1 t T TRUE true True`` and ``0 f F FALSE false False``.

    Raises:
        ValueError: For any other string.
    """
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid bool syntax {text!r}")


def _parse_string(text: str) -> str:
    return text


# Kind -> (parse function, zero value)
_PARSERS: dict[Kind, tuple[Callable[[str], Any], Any]] = {
    Kind.DURATION: (parse_duration, datetime.timedelta(0)),
    **{kind: (_parse_int(kind), 0) for kind in _INT_BOUNDS},
    Kind.FLOAT64: (_parse_float, 0.0),
    Kind.STRING: (_parse_string, ""),
    Kind.BOOL: (parse_bool, False),
}


def is_supported(kind: Kind) -> bool:
    """Return True when ``kind`` has a coercion rule."""
    return kind in _PARSERS


def parser_for(kind: Kind) -> Callable[[str], Any]:
    """Return the parse function of ``kind``.

    Raises:
        UnsupportedTypeError: If the kind has no coercion rule.
    """
    try:
        return _PARSERS[kind][0]
    except KeyError:
        raise UnsupportedTypeError(kind.value) from None


def zero_value(kind: Kind) -> Any:
    """Return the zero value of ``kind`` (``0`` for ``float32``)."""
    if kind is Kind.FLOAT32:
        return 0.0
    return _PARSERS[kind][1]


def is_zero(kind: Kind, value: Any) -> bool:
    """Return True when ``value`` is ``None`` or the zero value of ``kind``."""
    return value is None or value == zero_value(kind)


def _strip_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else the annotation."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _annotation_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or str(annotation)


def kind_of(annotation: Any) -> Kind:
    """Resolve a field annotation to its scalar kind.

    Args:
        annotation: Evaluated type annotation of a field.

    Returns:
        The matching kind.

    Raises:
        UnsupportedTypeError: If the annotation is not a bindable scalar.

    Examples:
        >>> kind_of(int)
        <Kind.INT: 'int'>
        >>> kind_of(str | None)
        <Kind.STRING: 'string'>
    """
    annotation = _strip_optional(annotation)
    try:
        return _ANNOTATION_KINDS[annotation]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(_annotation_name(annotation)) from None


__all__ = [
    "DURATION_UNITS",
    "Float32",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Kind",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "is_supported",
    "is_zero",
    "kind_of",
    "parse_bool",
    "parse_duration",
    "parser_for",
    "zero_value",
]
