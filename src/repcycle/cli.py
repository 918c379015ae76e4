"""CLI entry point for repcycle."""

import logging

import click

from . import __version__
from .commands import calendar, exercises, init, programs, progress, serve
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="repcycle")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """repcycle: recurring workout programs from a weekly template.

    One week-long template repeats for the whole program. repcycle
    derives every week from it, tracks completed sessions and keeps a
    resume position.

    Example usage:

        # Initialize the database
        repcycle init

        # Create an 8-week program
        repcycle programs create "Strength Block" -w 8 --day "Full Body=Squat:5x5" --day Rest

        # Work through it
        repcycle progress complete <program-id> --minutes 50
        repcycle calendar upcoming
    """
    configure_logging(logging.DEBUG if verbose else None)


# Register commands
main.add_command(init)
main.add_command(programs)
main.add_command(progress)
main.add_command(exercises)
main.add_command(calendar)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
