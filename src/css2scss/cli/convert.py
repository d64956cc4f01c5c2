"""CLI command: css2scss convert -- convert one CSS file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from css2scss.batch import convert_file, output_path_for
from css2scss.cli.options import build_converter, conversion_options, describe
from css2scss.errors import ParseError


@click.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(dir_okay=False))
@click.option("-o", "--output", default=None, help="Output SCSS file path")
@conversion_options
def convert(input_file: str, output: str | None, **flags: Any) -> None:
    """Convert a CSS file to SCSS.

    Writes INPUT with a .scss suffix unless --output is given. Exits with
    code 1 when the file is missing or cannot be parsed.
    """
    source = Path(input_file)
    if not source.is_file():
        click.echo(f"Error: Input file '{source}' does not exist.", err=True)
        sys.exit(1)

    converter = build_converter(flags)
    target = Path(output) if output else output_path_for(source)

    try:
        convert_file(converter, source, target)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Converted '{source}' to '{target}'")
    click.echo("Options used:")
    for line in describe(converter.options):
        click.echo(f"  - {line}")
