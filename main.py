"""
schemabase

Entry point for the schemabase command line.
"""

from schemabase.cli.commands import cli


def main() -> None:
    """
    Entry point for the schemabase script.

    Dispatches to the click command group.
    """
    cli()


if __name__ == "__main__":
    main()
