"""Data models for structconf.

This module defines the core data structures used by the binder:

- setting: Field helper that attaches binding metadata to a dataclass field
- Source: Enum for where a field's value came from (flag, env, default, none)
- BindContext: Frozen run-time context (env prefix, arguments, environment)
- Binding: Handle on one settable field of one dataclass instance
- FieldBinding: Record of a bound field, as returned by ``init``
- FieldInfo: Static description of a field, as returned by ``describe``
- BindResult: Aggregate result of an ``init`` call
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from structconf.kinds import parse_bool

if TYPE_CHECKING:
    from structconf.kinds import Kind

#: Metadata key holding the literal default string.
DEFAULT_KEY = "default"
#: Metadata key marking a field as required.
REQUIRED_KEY = "required"
#: Metadata key overriding the derived flag name.
FLAG_KEY = "flag"
#: Metadata key overriding the derived environment variable name.
ENV_KEY = "env"
#: Metadata key holding the flag help text.
HELP_KEY = "help"

#: Environment variable read by ``BindContext.from_environ`` for the env prefix.
ENV_PREFIX_VAR = "STRUCTCONF_ENV_PREFIX"
#: Environment variable read by ``BindContext.from_environ`` for the bool policy.
STRICT_BOOL_VAR = "STRUCTCONF_STRICT_BOOL"


def setting(
    default: str | None = None,
    *,
    required: bool = False,
    flag: str | None = None,
    env: str | None = None,
    help: str | None = None,  # noqa: A002  # pylint: disable=redefined-builtin
    initial: Any = None,
) -> Any:
    """Declare a bindable dataclass field.

    Args:
        default: Literal default, parsed with the field's kind like any
            other source string.
        required: Fail binding when no source provides a value.
        flag: Flag name used verbatim instead of the derived one.
        env: Environment variable name used verbatim instead of the derived one.
        help: Help text shown in the flag usage.
        initial: Python value the field holds before binding. ``None`` is
            replaced by the zero value of the field's kind during binding,
            unless the field is annotated ``X | None``.

    Returns:
        A ``dataclasses.field`` carrying the metadata.

    Raises:
        TypeError: If ``default`` is not a string.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Db:
        ...     port: int = setting("5432", help="listen port")
        ...     password: str = setting(required=True, env="DB_PASSWORD")
    """
    if default is not None and not isinstance(default, str):
        raise TypeError(f"setting default must be a string literal, got {type(default).__name__}")

    metadata: dict[str, Any] = {REQUIRED_KEY: required}
    if default is not None:
        metadata[DEFAULT_KEY] = default
    if flag is not None:
        metadata[FLAG_KEY] = flag
    if env is not None:
        metadata[ENV_KEY] = env
    if help is not None:
        metadata[HELP_KEY] = help
    return field(default=initial, metadata=metadata)


class Source(str, Enum):
    """Where a bound field's value came from.

    Attributes:
        FLAG: Command-line flag.
        ENV: Environment variable.
        DEFAULT: ``default`` metadata.
        NONE: No source; the field kept its zero or initial value.
    """

    FLAG = "flag"
    ENV = "env"
    DEFAULT = "default"
    NONE = "none"


def _default_program() -> str:
    return Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "structconf"


@dataclass(frozen=True, slots=True)
class BindContext:
    """Run-time context of one ``init`` call.

    Replaces process-wide mutable state: every input the binder reads besides
    the config object itself comes from here.

    Attributes:
        env_prefix: Prefix prepended verbatim to every derived environment name.
        args: Command-line arguments to bind, without the program name.
        environ: Environment variables to read.
        strict_bool: Raise ``CannotUseValueError`` on a malformed boolean
            instead of falling back to ``False``.
        program: Program name shown in the flag usage.

    Examples:
        >>> ctx = BindContext(env_prefix="APP", args=("--port", "80"), environ={})
        >>> ctx.env_prefix
        'APP'
    """

    env_prefix: str = ""
    args: tuple[str, ...] = field(default_factory=lambda: tuple(sys.argv[1:]))
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    strict_bool: bool = False
    program: str = field(default_factory=_default_program)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> BindContext:
        """Build a context whose own settings come from the environment.

        Reads ``STRUCTCONF_ENV_PREFIX`` and ``STRUCTCONF_STRICT_BOOL``.

        Args:
            environ: Environment mapping, ``os.environ`` when omitted.
            **overrides: Explicit field values, taking precedence.

        Returns:
            Configured BindContext.

        Raises:
            ValueError: If ``STRUCTCONF_STRICT_BOOL`` is not a boolean literal.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {"environ": env}
        if ENV_PREFIX_VAR in env:
            values["env_prefix"] = env[ENV_PREFIX_VAR]
        if STRICT_BOOL_VAR in env:
            values["strict_bool"] = parse_bool(env[STRICT_BOOL_VAR])
        values.update(overrides)
        return cls(**values)


class Binding:
    """Handle on one field of one dataclass instance.

    The flag registered for a field writes through its binding, so the field
    itself is the flag's backing storage.

    Args:
        owner: Dataclass instance holding the field.
        name: Attribute name of the field.
        kind: Scalar kind of the field.
        path: Dotted path of the field from the root config.
    """

    __slots__ = ("kind", "name", "owner", "path")

    def __init__(self, owner: Any, name: str, kind: Kind, path: str | None = None) -> None:
        self.owner = owner
        self.name = name
        self.kind = kind
        self.path = path or name

    def get(self) -> Any:
        """Return the field's current value."""
        return getattr(self.owner, self.name)

    def set(self, value: Any) -> None:
        """Store ``value`` in the field."""
        setattr(self.owner, self.name, value)

    def __repr__(self) -> str:
        return f"Binding({type(self.owner).__name__}.{self.name}, kind={self.kind.value})"


@dataclass(slots=True)
class FieldBinding:
    """A bound field, as reported by ``init``.

    Attributes:
        path: Dotted path of the field from the root config.
        flag: Flag key registered for the field.
        env: Environment variable name looked up for the field.
        kind: Scalar kind of the field.
        source: Where the final value came from.
        target: Binding of the field, for reading its value.
    """

    path: str
    flag: str
    env: str
    kind: Kind
    source: Source = Source.NONE
    target: Binding | None = field(default=None, repr=False, compare=False)

    @property
    def value(self) -> Any:
        """Current value of the bound field."""
        return self.target.get() if self.target is not None else None


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """Static description of a bindable field.

    Attributes:
        path: Dotted path of the field from the root config.
        flag: Flag key the field would be registered under.
        env: Environment variable name the field would be read from.
        kind: Scalar kind name, or the type name when unsupported.
        default: ``default`` metadata, if any.
        required: Whether the field is required.
        help: Help text, if any.
        supported: Whether the kind has a coercion rule.
    """

    path: str
    flag: str
    env: str
    kind: str
    default: str | None = None
    required: bool = False
    help: str | None = None
    supported: bool = True


@dataclass(slots=True)
class BindResult:
    """Aggregate result of an ``init`` call.

    Attributes:
        bindings: Bound fields in declaration order, depth first.
        args: Positional arguments left after the flags.
    """

    bindings: list[FieldBinding] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def by_source(self, source: Source) -> list[FieldBinding]:
        """Bindings whose value came from ``source``."""
        return [b for b in self.bindings if b.source == source]

    def get(self, path: str) -> FieldBinding:
        """Return the binding at dotted ``path``.

        Raises:
            KeyError: If no field is bound at ``path``.
        """
        for binding in self.bindings:
            if binding.path == path:
                return binding
        raise KeyError(path)


def is_settable(owner_type: type, name: str) -> bool:
    """Return True when field ``name`` of ``owner_type`` accepts assignment.

    Private names (leading underscore) and fields of frozen dataclasses are
    not settable.
    """
    if name.startswith("_"):
        return False
    params = getattr(owner_type, "__dataclass_params__", None)
    return not (params is not None and params.frozen)


__all__ = [
    "DEFAULT_KEY",
    "ENV_KEY",
    "ENV_PREFIX_VAR",
    "FLAG_KEY",
    "HELP_KEY",
    "REQUIRED_KEY",
    "STRICT_BOOL_VAR",
    "BindContext",
    "BindResult",
    "Binding",
    "FieldBinding",
    "FieldInfo",
    "Source",
    "is_settable",
    "setting",
]
