"""Resolution of ``module.path:ClassName`` configuration targets.

Used by the command-line tool to locate the configuration dataclass to
describe or resolve.
"""

from __future__ import annotations

import dataclasses
import importlib
import logging
import re

from structconf.exceptions import TargetError

logger = logging.getLogger(__name__)

#: Maximum length of a target string.
MAX_TARGET_LENGTH = 256

#: Pattern for valid targets (module.path:ClassName).
TARGET_PATTERN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_.]*:[a-zA-Z_][a-zA-Z0-9_]*")


def validate_target(target: str) -> str:
    """Validate a target string.

    Expected format: ``module.path:ClassName``

    Args:
        target: Target string to validate.

    Returns:
        The validated target (unchanged).

    Raises:
        TargetError: If target is malformed.

    Examples:
        >>> validate_target("myapp.settings:Config")
        'myapp.settings:Config'
        >>> validate_target("")
        Traceback (most recent call last):
            ...
        structconf.exceptions.TargetError: invalid target '': cannot be empty
    """
    if not target:
        raise TargetError(target, "cannot be empty")
    if len(target) > MAX_TARGET_LENGTH:
        raise TargetError(target, f"too long (max {MAX_TARGET_LENGTH} chars)")
    if not TARGET_PATTERN.fullmatch(target):
        raise TargetError(target, "expected 'module.path:ClassName'")
    return target


def load_target(target: str) -> type:
    """Import and return the dataclass named by ``target``.

    Args:
        target: ``module.path:ClassName`` string.

    Returns:
        The dataclass type.

    Raises:
        TargetError: If the target is malformed, cannot be imported, or is
            not a dataclass type.
    """
    validate_target(target)
    module_path, _, class_name = target.rpartition(":")
    try:
        module = importlib.import_module(module_path)
        config_type = getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        logger.debug("Cannot import target %r: %s", target, exc)
        raise TargetError(target, f"cannot import ({exc})") from exc

    if not (isinstance(config_type, type) and dataclasses.is_dataclass(config_type)):
        raise TargetError(target, "not a dataclass")
    return config_type


__all__ = [
    "MAX_TARGET_LENGTH",
    "TARGET_PATTERN",
    "load_target",
    "validate_target",
]
