"""Entry point binding a configuration dataclass.

Examples:
    >>> from dataclasses import dataclass
    >>> from structconf import BindContext, init, setting
    >>> @dataclass
    ... class Config:
    ...     port: int = setting("8080")
    ...     debug: bool = setting("false")
    >>> cfg = Config()
    >>> result = init(cfg, context=BindContext(args=("-debug",), environ={"PORT": "9000"}))
    >>> cfg.port, cfg.debug
    (9000, True)
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from structconf.exceptions import InvalidReceiverError
from structconf.flags import FlagSet
from structconf.models import BindContext, BindResult, Source
from structconf.walker import StructWalker

logger = logging.getLogger(__name__)


def _check_receiver(config: Any) -> None:
    if isinstance(config, type):
        raise InvalidReceiverError(f"type {config.__name__}")
    if not dataclasses.is_dataclass(config):
        raise InvalidReceiverError(type(config).__name__)


def init(
    config: Any,
    prefix: str = "",
    *,
    context: BindContext | None = None,
    flag_set: FlagSet | None = None,
) -> BindResult:
    """Populate ``config`` from command-line flags, environment and defaults.

    Every scalar field is bound in declaration order, nested dataclasses
    depth first. Once all fields are bound and their flags registered, the
    command line is parsed a single time, so a flag given on the command line
    always has the final word.

    Args:
        config: Dataclass instance to populate in place.
        prefix: Base prefix path (space-separated words) of every key.
        context: Run-time context; a default one reads ``sys.argv[1:]`` and
            ``os.environ``.
        flag_set: Flag set to register on; a fresh one is used when omitted.

    Returns:
        BindResult listing each bound field with its source, and the
        positional arguments left after the flags.

    Raises:
        InvalidReceiverError: If ``config`` is not a dataclass instance.
        CannotSetError: On a private field or a frozen dataclass.
        UnsupportedTypeError: On a field whose type cannot be bound.
        CannotUseValueError: On a source string that does not parse.
        MissingRequiredError: On a required field left without a value.
        FlagRedefinedError: When two fields derive the same flag key.
        FlagParseError: When the command line does not parse.
    """
    _check_receiver(config)
    if context is None:
        context = BindContext()
    if flag_set is None:
        flag_set = FlagSet(context.program)

    walker = StructWalker(context, flag_set)
    walker.walk(config, prefix)

    given = set(flag_set.parse(context.args))
    for binding in walker.bindings:
        if binding.flag in given:
            binding.source = Source.FLAG

    result = BindResult(bindings=walker.bindings, args=list(flag_set.args))
    logger.info(
        "Bound %d field(s) of %s (%d from flags, %d from env, %d from defaults)",
        len(result.bindings),
        type(config).__name__,
        len(result.by_source(Source.FLAG)),
        len(result.by_source(Source.ENV)),
        len(result.by_source(Source.DEFAULT)),
    )
    return result


__all__ = [
    "init",
]
