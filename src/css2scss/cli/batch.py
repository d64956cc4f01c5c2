"""CLI command: css2scss batch -- convert every CSS file in a directory."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from css2scss.batch import convert_directory, find_stylesheets
from css2scss.cli.options import build_converter, conversion_options


@click.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option("-o", "--output", default=None, help="Output directory (default: same as input)")
@conversion_options
def batch(directory: str, output: str | None, **flags: Any) -> None:
    """Convert every .css file in DIRECTORY.

    Files that fail are reported and skipped; the command still exits with
    code 0. Only a missing directory is fatal.
    """
    source_dir = Path(directory)
    if not source_dir.is_dir():
        click.echo(f"Error: Directory '{source_dir}' does not exist.", err=True)
        sys.exit(1)

    if not find_stylesheets(source_dir):
        click.echo("No CSS files found in the directory.")
        return

    converter = build_converter(flags)
    report = convert_directory(converter, source_dir, Path(output) if output else None)

    for outcome in report.outcomes:
        if outcome.ok:
            assert outcome.output is not None
            click.echo(f"Converted: {outcome.source.name} -> {outcome.output.name}")
        else:
            click.echo(f"Failed: {outcome.source.name}: {outcome.error}", err=True)

    click.echo()
    click.echo(
        f"Batch conversion completed: {len(report.succeeded)}/{report.total} files converted"
    )
