"""Specialized exceptions raised by structconf.

Exception hierarchy::

    StructconfError (base for all binding errors)
        InvalidReceiverError (config is not a dataclass instance, also TypeError)
        FieldError (error tied to one field)
            CannotSetError (private field or frozen dataclass)
            MissingRequiredError (required field resolved to nothing)
        UnsupportedTypeError (no coercion rule for the kind, also TypeError)
        CannotUseValueError (value does not parse into the kind, also ValueError)
        TargetError (invalid or unimportable module:Class target, also ValueError)
        FlagError (command-line flag registration or parsing)
            FlagRedefinedError (same flag key registered twice)
            FlagParseError (unknown flag or malformed value on the command line)

Errors compare structurally: two instances of the same class built from the
same arguments are equal, which lets callers and tests match an expected error
with ``==``.
"""

from __future__ import annotations

from typing import Any


class StructconfError(Exception):
    """Base exception for all structconf errors.

    Attributes:
        message: Human-readable error message.

    Examples:
        >>> StructconfError("boom") == StructconfError("boom")
        True
    """

    def __init__(self, message: str) -> None:
        """Initialize StructconfError.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message

    def _identity(self) -> tuple[Any, ...]:
        return (self.message,)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._identity() == other._identity()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._identity()))


class InvalidReceiverError(StructconfError, TypeError):
    """The object handed to ``init`` cannot receive configuration.

    Only dataclass instances are accepted: ``None``, a dataclass type, or any
    other object raise this error.

    Attributes:
        received: Type name of the rejected object.

    Examples:
        >>> raise InvalidReceiverError("int")
        Traceback (most recent call last):
        ...
        structconf.exceptions.InvalidReceiverError: invalid receiver: expected a dataclass instance, got int
    """

    def __init__(self, received: str) -> None:
        """Initialize InvalidReceiverError.

        Args:
            received: Type name of the rejected object.
        """
        super().__init__(f"invalid receiver: expected a dataclass instance, got {received}")
        self.received = received


class FieldError(StructconfError):
    """Base class for errors tied to a single field.

    Attributes:
        field_name: Name of the offending field.
    """

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field_name = field_name


class CannotSetError(FieldError):
    """The field cannot be assigned from outside.

    Raised for private fields (leading underscore) and for fields of a frozen
    dataclass.

    Examples:
        >>> raise CannotSetError("_secret")
        Traceback (most recent call last):
        ...
        structconf.exceptions.CannotSetError: cannot set field '_secret'
    """

    def __init__(self, field_name: str) -> None:
        super().__init__(field_name, f"cannot set field '{field_name}'")


class MissingRequiredError(FieldError):
    """A required field received no value from any source.

    Examples:
        >>> raise MissingRequiredError("value")
        Traceback (most recent call last):
        ...
        structconf.exceptions.MissingRequiredError: missing required field 'value'
    """

    def __init__(self, field_name: str) -> None:
        super().__init__(field_name, f"missing required field '{field_name}'")


class UnsupportedTypeError(StructconfError, TypeError):
    """The field's scalar kind has no coercion rule.

    Attributes:
        kind: Name of the unsupported kind (e.g. ``"float32"``).

    Examples:
        >>> raise UnsupportedTypeError("float32")
        Traceback (most recent call last):
        ...
        structconf.exceptions.UnsupportedTypeError: unsupported type: float32
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"unsupported type: {kind}")
        self.kind = kind


class CannotUseValueError(StructconfError, ValueError):
    """A source string does not parse into the field's kind.

    Attributes:
        value: The offending string.
        zero: Zero value of the target type.
        type_name: Name of the target type.

    Examples:
        >>> raise CannotUseValueError("wrong", 0, "int64")
        Traceback (most recent call last):
        ...
        structconf.exceptions.CannotUseValueError: cannot use 'wrong' as int64 value
        >>> CannotUseValueError("wrong", 0, "int") == CannotUseValueError("wrong", 0, "int")
        True
    """

    def __init__(self, value: str, zero: Any, type_name: str | None = None) -> None:
        """Initialize CannotUseValueError.

        Args:
            value: The offending string.
            zero: Zero value of the target type.
            type_name: Name of the target type, derived from ``zero`` when omitted.
        """
        type_name = type_name or type(zero).__name__
        super().__init__(f"cannot use {value!r} as {type_name} value")
        self.value = value
        self.zero = zero
        self.type_name = type_name

    def _identity(self) -> tuple[Any, ...]:
        return (self.value, self.type_name, self.zero)


class TargetError(StructconfError, ValueError):
    """A ``module.path:ClassName`` target is malformed or cannot be imported.

    Attributes:
        target: The offending target string.
        reason: Description of the failure.
    """

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"invalid target {target!r}: {reason}")
        self.target = target
        self.reason = reason


class FlagError(StructconfError):
    """Base class for command-line flag errors."""


class FlagRedefinedError(FlagError):
    """A flag key was registered twice on the same flag set.

    Attributes:
        flag: The duplicated flag key.
    """

    def __init__(self, flag: str) -> None:
        super().__init__(f"flag redefined: {flag}")
        self.flag = flag


class FlagParseError(FlagError):
    """The command line could not be parsed against the registered flags.

    Attributes:
        reason: Parser message.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"cannot parse command line: {reason}")
        self.reason = reason


__all__ = [
    "CannotSetError",
    "CannotUseValueError",
    "FieldError",
    "FlagError",
    "FlagParseError",
    "FlagRedefinedError",
    "InvalidReceiverError",
    "MissingRequiredError",
    "StructconfError",
    "TargetError",
    "UnsupportedTypeError",
]
