"""csslint CLI entry point: Click group with subcommands."""

import logging

import click

from csslint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csslint")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """csslint - check stylesheets against CSS authoring conventions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# Import and register subcommands
from csslint.cli.check import check  # noqa: E402
from csslint.cli.inspect import inspect  # noqa: E402

cli.add_command(check)
cli.add_command(inspect)
