"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the repcycle database.

    Creates the data directory (REPCYCLE_DATA_DIR, or ./data) and the
    SQLite schema. Safe to run more than once.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing repcycle in {data_dir}")
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("repcycle is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create a program:")
    click.echo('     repcycle programs create "Strength Block" -w 8 \\')
    click.echo('         --day "Upper=Bench Press:4x6@80,Row:4x8" --day Rest \\')
    click.echo('         --day "Lower=Squat:5x5@100" --day Rest')
    click.echo()
    click.echo("  2. Track sessions:")
    click.echo("     repcycle progress complete <program-id> --minutes 45")
    click.echo("     repcycle calendar range --days 14")
