"""Command line interface."""

from pathlib import Path

import click

from schemabase.cli.generator import SchemaGenerator
from schemabase.core.config import config


@click.group()
def cli():
    """schemabase - compile JSON Schema documents into SQL DDL."""
    pass


@cli.command()
@click.argument("schema_path", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["sql", "ir", "plan"]),
    default=config.output_format,
    show_default=True,
    help="Output format",
)
@click.option(
    "--db",
    "dialect",
    type=click.Choice(["postgres"]),
    default=config.dialect,
    show_default=True,
    help="Target database",
)
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the output to this file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def generate(schema_path, output_format, dialect, out_path, verbose):
    """Generate a create script from a schema file or directory.

    A directory is compiled as one unit: every *.json file becomes a table and
    `$ref`s between the files become foreign keys.

    Examples:
      schemabase generate schema.json
      schemabase generate schema.json --format ir
      schemabase generate schemas/ --out init.sql
    """
    generator = SchemaGenerator(
        schema_path,
        output_format=output_format,
        dialect=dialect,
        out_path=out_path,
        log_level="info" if verbose else None,
    )
    generator.run()
