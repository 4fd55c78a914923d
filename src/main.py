"""Entry point for the documentation builder.

Running ``python -m src.main`` is equivalent to the ``build-docs`` command.
"""

from src.cli.commands import build


def main() -> None:
    """Launch the CLI."""
    build()


if __name__ == "__main__":
    main()
