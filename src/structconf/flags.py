"""Command-line flag registration and parsing.

:class:`FlagSet` collects one flag per bound field and parses the command
line against them with ``click``. Each flag is backed by a :class:`Binding`:
when the flag appears on the command line, the parsed value is written
straight into the field.

Flag syntax::

    -key value    -key=value    --key value    --key=value
    -bool         -bool=false   (a bare boolean flag means true)

Parsing stops at the first positional argument or at ``--``; the remaining
arguments are kept in :attr:`FlagSet.args`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import click
from click.core import ParameterSource

from structconf.exceptions import FlagParseError, FlagRedefinedError
from structconf.kinds import Kind, parser_for

if TYPE_CHECKING:
    from structconf.models import Binding

logger = logging.getLogger(__name__)

_HELP_OPTIONS = ["-h", "--help"]


class KindParamType(click.ParamType):
    """Click parameter type converting strings with a kind's parse rule.

    Examples:
        >>> KindParamType(Kind.DURATION).convert("90s", None, None)
        datetime.timedelta(seconds=90)
    """

    def __init__(self, kind: Kind) -> None:
        self.kind = kind
        self.name = kind.value
        self._parse = parser_for(kind)

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return self._parse(value)
        except ValueError:
            self.fail(f"cannot use {value!r} as {self.name} value", param, ctx)


@dataclass(slots=True)
class _Flag:
    key: str
    binding: Binding
    default: str
    help: str | None


def _display(value: Any, kind: Kind) -> str:
    if value is None:
        return ""
    if kind is Kind.BOOL:
        return "true" if value else "false"
    return str(value)


def _split(arg: str) -> tuple[str, str | None]:
    """Split ``-key=value`` / ``--key`` into (key, value or None)."""
    name = arg[2:] if arg.startswith("--") else arg[1:]
    key, sep, value = name.partition("=")
    return key, (value if sep else None)


def _is_flag(arg: str) -> bool:
    return len(arg) > 1 and arg.startswith("-") and arg != "--"


def lookup(args: Sequence[str], key: str, *, is_bool: bool = False) -> str | None:
    """Return the raw value given for flag ``key`` in ``args``.

    Scans the flags in front of the first positional argument or ``--``.
    When a flag is repeated the last occurrence wins.

    Args:
        args: Command-line arguments, without the program name.
        key: Flag key to look for.
        is_bool: The flag is boolean: a bare ``-key`` means ``"true"`` and
            does not consume the next argument.

    Returns:
        The raw string value, or None when the flag is absent or misses its
        value (the parser reports the latter).

    Examples:
        >>> lookup(["-db-port", "5432", "run"], "db-port")
        '5432'
        >>> lookup(["--debug"], "debug", is_bool=True)
        'true'
        >>> lookup(["run", "--debug"], "debug", is_bool=True) is None
        True
    """
    found: str | None = None
    index = 0
    while index < len(args):
        arg = args[index]
        if not _is_flag(arg):
            break
        name, value = _split(arg)
        index += 1
        if name != key:
            # Assume a separate value follows any other flag given without "=".
            if value is None and index < len(args) and not _is_flag(args[index]) and args[index] != "--":
                index += 1
            continue
        if value is not None:
            found = value
        elif is_bool:
            found = "true"
        elif index < len(args):
            found = args[index]
            index += 1
    return found


class FlagSet:
    """Set of command-line flags bound to dataclass fields.

    Args:
        name: Program name shown in the usage.

    Examples:
        >>> flags = FlagSet("app")
        >>> flags.args
        []
    """

    def __init__(self, name: str = "structconf") -> None:
        self.name = name
        self.args: list[str] = []
        self.parsed = False
        self._flags: dict[str, _Flag] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    @property
    def keys(self) -> list[str]:
        """Registered flag keys in registration order."""
        return list(self._flags)

    def register(
        self,
        key: str,
        binding: Binding,
        *,
        help: str | None = None,  # noqa: A002  # pylint: disable=redefined-builtin
    ) -> None:
        """Register flag ``key`` backed by ``binding``.

        The field's current value becomes the flag's displayed default.

        Args:
            key: Flag key, without leading dashes.
            binding: Field the flag writes into.
            help: Help text shown in the usage.

        Raises:
            FlagRedefinedError: If ``key`` is already registered.
            UnsupportedTypeError: If the field's kind has no parse rule.
        """
        if key in self._flags:
            raise FlagRedefinedError(key)
        parser_for(binding.kind)
        self._flags[key] = _Flag(key, binding, _display(binding.get(), binding.kind), help)
        logger.debug("Registered flag '-%s' (%s) for %s", key, binding.kind.value, binding.path)

    def _build_command(self) -> tuple[click.Command, dict[str, _Flag]]:
        params: list[click.Parameter] = []
        by_name: dict[str, _Flag] = {}
        for index, flag in enumerate(self._flags.values()):
            name = f"flag_{index}"
            by_name[name] = flag
            decls = [name, f"-{flag.key}", f"--{flag.key}"]
            extra: dict[str, Any] = {}
            if flag.binding.kind is Kind.BOOL:
                extra = {"is_flag": False, "flag_value": True}
            params.append(
                click.Option(
                    decls,
                    type=KindParamType(flag.binding.kind),
                    default=None,
                    show_default=flag.default or False,
                    help=flag.help,
                    **extra,
                )
            )
        command = click.Command(
            self.name,
            params=params,
            context_settings={
                "allow_extra_args": True,
                "allow_interspersed_args": False,
                "help_option_names": _HELP_OPTIONS,
            },
        )
        return command, by_name

    def _normalize(self, args: Sequence[str]) -> list[str]:
        """Rewrite ``-k=value`` of one-letter keys as ``--k=value``.

        click reads ``-k=value`` as the short option ``-k`` with the value
        ``=value``.
        """
        result = list(args)
        index = 0
        while index < len(result):
            arg = result[index]
            if not _is_flag(arg):
                break
            key, value = _split(arg)
            index += 1
            if value is not None:
                if len(key) == 1 and not arg.startswith("--"):
                    result[index - 1] = "-" + arg
                continue
            flag = self._flags.get(key)
            takes_value = flag is None or flag.binding.kind is not Kind.BOOL
            if takes_value and index < len(result) and not _is_flag(result[index]) and result[index] != "--":
                index += 1
        return result

    def parse(self, args: Sequence[str]) -> list[str]:
        """Parse ``args`` and write every flag given into its field.

        Args:
            args: Command-line arguments, without the program name.

        Returns:
            Keys of the flags found on the command line.

        Raises:
            FlagParseError: On an unknown flag, a missing or malformed value.
            SystemExit: With status 0 after printing the usage for ``-h``.
        """
        command, by_name = self._build_command()
        try:
            ctx = command.make_context(self.name, self._normalize(args))
        except click.exceptions.Exit as exc:
            raise SystemExit(exc.exit_code) from None
        except click.ClickException as exc:
            raise FlagParseError(exc.format_message()) from exc

        given: list[str] = []
        for name, flag in by_name.items():
            if ctx.get_parameter_source(name) is not ParameterSource.COMMANDLINE:
                continue
            flag.binding.set(ctx.params[name])
            given.append(flag.key)
        self.args = list(ctx.args)
        self.parsed = True
        logger.debug("Parsed %d flag(s) from the command line, %d argument(s) left", len(given), len(self.args))
        return given

    def usage(self) -> str:
        """Return the usage text listing every registered flag."""
        command, _ = self._build_command()
        with click.Context(command, info_name=self.name) as ctx:
            return command.get_help(ctx)


__all__ = [
    "FlagSet",
    "KindParamType",
    "lookup",
]
