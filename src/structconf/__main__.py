"""Allow ``python -m structconf``."""

from structconf.cli.app import app


def main() -> None:
    """Run the structconf command-line tool."""
    app()


if __name__ == "__main__":
    main()
