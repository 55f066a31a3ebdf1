"""Basic binding example.

Binds a nested configuration dataclass from the real command line and
environment, then prints where each value came from.

Usage:
    python examples/binding/01_basic.py -db-port 6000
    APP_DB_HOST=db.internal python examples/binding/01_basic.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from structconf import BindContext, init, setting


@dataclass
class Db:
    host: str = setting("localhost", help="database host")
    port: int = setting("5432", help="database port")
    timeout: timedelta = setting("5s")


@dataclass
class Config:
    name: str = setting("demo", flag="app-name")
    debug: bool = setting("false")
    db: Db = field(default_factory=Db)


def main() -> None:
    """Bind Config and print every field with its source."""
    config = Config()
    result = init(config, context=BindContext(env_prefix="APP"))

    print(config)
    print()
    for binding in result.bindings:
        print(f"  [{binding.source.value:>7}] {binding.path} = {binding.value!r}")
    if result.args:
        print(f"\nRemaining arguments: {result.args}")


if __name__ == "__main__":
    main()
