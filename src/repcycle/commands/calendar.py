"""Calendar commands."""

from datetime import date, timedelta

import click

from ..db import get_db_path
from ..models.views import ScheduledWorkoutView
from ..services import ProgramCatalog
from .base import async_command, default_user_id, echo_info, ensure_initialized


def _echo_workout(workout: ScheduledWorkoutView) -> None:
    mark = click.style("[x]", fg="green") if workout.is_completed else "[ ]"
    click.echo(
        f"  {mark} {workout.program_icon} {workout.program_name}: "
        f"{workout.session.name} (W{workout.week_number}D{workout.day_number})"
    )


@click.group()
@click.pass_context
def calendar(ctx):
    """View scheduled sessions by date."""
    ensure_initialized(ctx)


@calendar.command("range")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), help="First date (default: today)")
@click.option("--days", type=int, default=7, show_default=True, help="Number of days to show")
@click.pass_context
@async_command
async def date_range(ctx, start, days: int):
    """Show sessions scheduled over a range of dates."""
    first = start.date() if start else date.today()
    last = first + timedelta(days=max(days, 1) - 1)

    catalog = ProgramCatalog(get_db_path())
    scheduled = await catalog.get_scheduled_workouts(default_user_id(), first, last)
    if not scheduled:
        echo_info(f"Nothing scheduled between {first} and {last}")
        return

    for when, workouts in scheduled.items():
        click.echo(click.style(when.strftime("%a %Y-%m-%d"), bold=True))
        for workout in workouts:
            _echo_workout(workout)


@calendar.command()
@click.pass_context
@async_command
async def today(ctx):
    """Show today's sessions."""
    catalog = ProgramCatalog(get_db_path())
    workouts = await catalog.get_todays_workouts(default_user_id())
    if not workouts:
        echo_info("Nothing scheduled today")
        return
    for workout in workouts:
        _echo_workout(workout)


@calendar.command()
@click.option("--limit", "-n", type=int, default=5, show_default=True)
@click.pass_context
@async_command
async def upcoming(ctx, limit: int):
    """Show the next scheduled sessions."""
    catalog = ProgramCatalog(get_db_path())
    workouts = await catalog.get_upcoming_workouts(default_user_id(), limit=limit)
    if not workouts:
        echo_info("Nothing scheduled in the next 30 days")
        return
    for workout in workouts:
        click.echo(workout.scheduled_date.strftime("%a %Y-%m-%d"))
        _echo_workout(workout)
