"""Recursive dataclass walker.

:class:`StructWalker` visits the fields of a dataclass instance in declaration
order, descending into nested dataclasses with an extended prefix path. For
every scalar field it derives the flag and environment keys, resolves the
value to apply (command-line flag, then environment variable, then
``default`` metadata), enforces ``required`` and hands the value to the
setter. The first error aborts the walk.
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from typing import TYPE_CHECKING, Any

from structconf.exceptions import CannotSetError, MissingRequiredError, UnsupportedTypeError
from structconf.flags import lookup
from structconf.kinds import Kind, is_supported, is_zero, kind_of, zero_value
from structconf.models import (
    DEFAULT_KEY,
    HELP_KEY,
    REQUIRED_KEY,
    Binding,
    FieldBinding,
    FieldInfo,
    Source,
    is_settable,
)
from structconf.naming import env_name, flag_name, join_strings, nested_prefix
from structconf.setter import register_flag, set_value

if TYPE_CHECKING:
    from structconf.flags import FlagSet
    from structconf.models import BindContext

logger = logging.getLogger(__name__)

_PATH_SEPARATOR = "."


def _is_optional(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return (origin is typing.Union or origin is types.UnionType) and type(None) in typing.get_args(annotation)


def _dataclass_type(annotation: Any) -> type | None:
    """Return the dataclass type behind ``annotation`` (``X`` or ``X | None``)."""
    if _is_optional(annotation):
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        annotation = members[0]
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return annotation
    return None


def _type_hints(owner_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(owner_type)
    except NameError as exc:
        # Forward references to names local to a function cannot be resolved.
        logger.debug("Cannot resolve annotations of %s: %s", owner_type.__qualname__, exc)
        return {}


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return bool(field.metadata.get(REQUIRED_KEY, False))


class StructWalker:
    """Bind the fields of a dataclass instance, depth first.

    Args:
        context: Run-time context (env prefix, arguments, environment).
        flag_set: Flag set receiving one flag per bound field.

    Attributes:
        bindings: Fields bound so far, in visiting order.
    """

    def __init__(self, context: BindContext, flag_set: FlagSet) -> None:
        self.context = context
        self.flag_set = flag_set
        self.bindings: list[FieldBinding] = []

    def walk(self, obj: Any, prefix: str = "", path: str = "") -> None:
        """Bind every field of ``obj``.

        Args:
            obj: Dataclass instance.
            prefix: Prefix path of ``obj`` (space-separated struct names).
            path: Dotted attribute path of ``obj`` from the root config.

        Raises:
            CannotSetError: On a private field or a frozen dataclass.
            UnsupportedTypeError: On a field whose type cannot be bound.
            CannotUseValueError: On a source string that does not parse.
            MissingRequiredError: On a required field left without a value.
            FlagRedefinedError: When two fields derive the same flag key.
        """
        owner_type = type(obj)
        hints = _type_hints(owner_type)

        for field in dataclasses.fields(obj):
            if not is_settable(owner_type, field.name):
                raise CannotSetError(field.name)

            annotation = hints.get(field.name, field.type)
            field_path = join_strings(_PATH_SEPARATOR, path, field.name)

            nested_type = _dataclass_type(annotation)
            if nested_type is not None:
                nested = getattr(obj, field.name)
                if nested is None:
                    nested = nested_type()
                    setattr(obj, field.name, nested)
                self.walk(nested, nested_prefix(prefix, field.name), field_path)
                continue

            kind = kind_of(annotation)
            if not is_supported(kind):
                raise UnsupportedTypeError(kind.value)

            binding = Binding(obj, field.name, kind, field_path)
            self._bind_field(field, binding, prefix, optional=_is_optional(annotation))

    def _resolve(
        self,
        field: dataclasses.Field[Any],
        flag_key: str,
        env_key: str,
        kind: Kind,
    ) -> tuple[str | None, Source]:
        """Pick the source string of a field: flag, then env, then default."""
        value = lookup(self.context.args, flag_key, is_bool=kind is Kind.BOOL)
        if value is not None:
            return value, Source.FLAG

        value = self.context.environ.get(env_key)
        if value:
            return value, Source.ENV

        if DEFAULT_KEY in field.metadata:
            return field.metadata[DEFAULT_KEY], Source.DEFAULT

        return None, Source.NONE

    def _bind_field(
        self,
        field: dataclasses.Field[Any],
        binding: Binding,
        prefix: str,
        *,
        optional: bool,
    ) -> None:
        flag_key = flag_name(field, prefix)
        env_key = env_name(field, prefix, self.context.env_prefix)
        help_text = field.metadata.get(HELP_KEY)

        value, source = self._resolve(field, flag_key, env_key, binding.kind)

        if value is None:
            if _is_required(field) and is_zero(binding.kind, binding.get()):
                raise MissingRequiredError(binding.path)
            if binding.get() is None and not optional:
                binding.set(zero_value(binding.kind))
            register_flag(binding, self.flag_set, flag_key, help=help_text)
        else:
            set_value(
                binding,
                self.flag_set,
                flag_key,
                value,
                strict_bool=self.context.strict_bool,
                help=help_text,
            )

        logger.debug("Bound %s (flag=-%s, env=%s, source=%s)", binding.path, flag_key, env_key, source.value)
        self.bindings.append(FieldBinding(binding.path, flag_key, env_key, binding.kind, source, binding))


def _describe_type(
    owner_type: type,
    prefix: str,
    path: str,
    env_prefix: str,
    infos: list[FieldInfo],
) -> None:
    hints = _type_hints(owner_type)
    for field in dataclasses.fields(owner_type):
        if not is_settable(owner_type, field.name):
            raise CannotSetError(field.name)

        annotation = hints.get(field.name, field.type)
        field_path = join_strings(_PATH_SEPARATOR, path, field.name)

        nested_type = _dataclass_type(annotation)
        if nested_type is not None:
            _describe_type(nested_type, nested_prefix(prefix, field.name), field_path, env_prefix, infos)
            continue

        try:
            kind = kind_of(annotation)
        except UnsupportedTypeError as exc:
            kind_name, supported = exc.kind, False
        else:
            kind_name, supported = kind.value, is_supported(kind)

        infos.append(
            FieldInfo(
                path=field_path,
                flag=flag_name(field, prefix),
                env=env_name(field, prefix, env_prefix),
                kind=kind_name,
                default=field.metadata.get(DEFAULT_KEY),
                required=_is_required(field),
                help=field.metadata.get(HELP_KEY),
                supported=supported,
            )
        )


def describe(config: Any, prefix: str = "", *, env_prefix: str = "") -> list[FieldInfo]:
    """List the flag key, env key and metadata of every field of ``config``.

    Nothing is read from the command line or the environment and nothing is
    assigned. Unsupported field types are reported with ``supported=False``
    instead of raising.

    Args:
        config: Dataclass type or instance.
        prefix: Base prefix path.
        env_prefix: Application-wide environment prefix.

    Returns:
        One FieldInfo per scalar field, depth first.

    Raises:
        TypeError: If ``config`` is not a dataclass.
        CannotSetError: On a private field or a frozen dataclass.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Cfg:
        ...     port: int = 0
        >>> [info.flag for info in describe(Cfg, "Http")]
        ['http-port']
    """
    owner_type = config if isinstance(config, type) else type(config)
    if not dataclasses.is_dataclass(owner_type):
        raise TypeError(f"expected a dataclass, got {owner_type.__name__}")
    infos: list[FieldInfo] = []
    _describe_type(owner_type, prefix, "", env_prefix, infos)
    return infos


__all__ = [
    "StructWalker",
    "describe",
]
