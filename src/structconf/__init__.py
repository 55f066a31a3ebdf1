"""Bind dataclass fields to command-line flags, environment variables and defaults.

Each scalar field of a configuration dataclass takes its value from, in
priority order, a command-line flag, an environment variable or its declared
default. Values are parsed with the field's type and ``required`` fields are
enforced.

Examples:
    >>> from dataclasses import dataclass, field
    >>> from datetime import timedelta
    >>> from structconf import BindContext, init, setting
    >>> @dataclass
    ... class Db:
    ...     host: str = setting("localhost")
    ...     timeout: timedelta = setting("5s")
    >>> @dataclass
    ... class Config:
    ...     db: Db = field(default_factory=Db)
    >>> cfg = Config()
    >>> ctx = BindContext(env_prefix="APP", args=("-db-host", "db.internal"), environ={"APP_DB_TIMEOUT": "1m"})
    >>> _ = init(cfg, context=ctx)
    >>> cfg.db.host, cfg.db.timeout
    ('db.internal', datetime.timedelta(seconds=60))
"""

from structconf.binder import init
from structconf.exceptions import (
    CannotSetError,
    CannotUseValueError,
    FieldError,
    FlagError,
    FlagParseError,
    FlagRedefinedError,
    InvalidReceiverError,
    MissingRequiredError,
    StructconfError,
    TargetError,
    UnsupportedTypeError,
)
from structconf.flags import FlagSet
from structconf.kinds import (
    Float32,
    Int8,
    Int16,
    Int32,
    Int64,
    Kind,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    parse_duration,
)
from structconf.meta import __version__
from structconf.models import (
    BindContext,
    BindResult,
    FieldBinding,
    FieldInfo,
    Source,
    setting,
)
from structconf.walker import describe

__all__ = [
    "BindContext",
    "BindResult",
    "CannotSetError",
    "CannotUseValueError",
    "FieldBinding",
    "FieldError",
    "FieldInfo",
    "FlagError",
    "FlagParseError",
    "FlagRedefinedError",
    "FlagSet",
    "Float32",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidReceiverError",
    "Kind",
    "MissingRequiredError",
    "Source",
    "StructconfError",
    "TargetError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnsupportedTypeError",
    "__version__",
    "describe",
    "init",
    "parse_duration",
    "setting",
]
