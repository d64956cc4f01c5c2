"""css2scss CLI entry point: Click group with subcommands."""

import click

from css2scss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="css2scss")
def cli() -> None:
    """css2scss - convert CSS to nested SCSS with BEM support and variables."""


# Import and register subcommands
from css2scss.cli.convert import convert  # noqa: E402
from css2scss.cli.batch import batch  # noqa: E402

cli.add_command(convert)
cli.add_command(batch)
