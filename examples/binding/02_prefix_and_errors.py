"""Prefixes and error handling example.

Binds two copies of the same dataclass under different prefixes and shows
the errors raised for a missing required field and a malformed value.

Usage:
    python examples/binding/02_prefix_and_errors.py
"""

from __future__ import annotations

from dataclasses import dataclass

from structconf import (
    BindContext,
    CannotUseValueError,
    MissingRequiredError,
    describe,
    init,
    setting,
)


@dataclass
class Endpoint:
    url: str = setting(required=True)
    retries: int = setting("3")


def main() -> None:
    """Bind the same dataclass twice and trigger both error kinds."""
    environ = {"SVC_PRIMARY_URL": "https://a.example", "SVC_BACKUP_URL": "https://b.example"}
    for prefix in ("primary", "backup"):
        endpoint = Endpoint()
        init(endpoint, prefix, context=BindContext(env_prefix="SVC", args=(), environ=environ))
        print(f"{prefix}: {endpoint}")

    print("\nKeys for prefix 'primary':")
    for info in describe(Endpoint, "primary", env_prefix="SVC"):
        print(f"  {info.path}: -{info.flag} / ${info.env}")

    try:
        init(Endpoint(), context=BindContext(args=(), environ={}))
    except MissingRequiredError as exc:
        print(f"\nMissing: {exc}")

    try:
        init(Endpoint(), context=BindContext(args=("-retries", "many", "-url", "x"), environ={}))
    except CannotUseValueError as exc:
        print(f"Invalid: {exc}")


if __name__ == "__main__":
    main()
