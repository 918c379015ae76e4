"""Template editing commands."""

import click

from ..db import get_db_path
from ..services import ProgramEditor
from .base import (
    async_command,
    echo_success,
    ensure_initialized,
    format_exercise,
    parse_exercise,
    reports_errors,
)


@click.group()
@click.pass_context
def exercises(ctx):
    """Edit a program's weekly template.

    Changes apply to every week of the program. Completed sessions and
    their history are not affected.
    """
    ensure_initialized(ctx)


@exercises.command()
@click.argument("program_id")
@click.argument("day", type=int)
@click.argument("exercise")
@click.pass_context
@async_command
@reports_errors
async def add(ctx, program_id: str, day: int, exercise: str):
    """Add EXERCISE ("NAME:SETSxREPS[@WEIGHT][/REST]") to DAY."""
    editor = ProgramEditor(get_db_path())
    parsed = parse_exercise(exercise)
    updated = await editor.add_exercise(program_id, day, parsed)
    echo_success(f"Added {format_exercise(parsed)} to day {day} (~{updated.estimated_duration} min)")


@exercises.command()
@click.argument("program_id")
@click.argument("day", type=int)
@click.argument("index", type=int)
@click.argument("exercise")
@click.pass_context
@async_command
@reports_errors
async def update(ctx, program_id: str, day: int, index: int, exercise: str):
    """Replace the exercise at INDEX (0-based) on DAY."""
    editor = ProgramEditor(get_db_path())
    parsed = parse_exercise(exercise)
    updated = await editor.update_exercise(program_id, day, index, parsed)
    echo_success(f"Updated exercise {index} on day {day} (~{updated.estimated_duration} min)")


@exercises.command("delete")
@click.argument("program_id")
@click.argument("day", type=int)
@click.argument("index", type=int)
@click.pass_context
@async_command
@reports_errors
async def remove(ctx, program_id: str, day: int, index: int):
    """Remove the exercise at INDEX (0-based) from DAY."""
    editor = ProgramEditor(get_db_path())
    updated = await editor.delete_exercise(program_id, day, index)
    echo_success(f"Removed exercise {index} from day {day} ({len(updated.exercises)} left)")


@exercises.command("rest-day")
@click.argument("program_id")
@click.argument("day", type=int)
@click.option("--off", "workout", is_flag=True, help="Turn a rest day back into a workout day")
@click.pass_context
@async_command
@reports_errors
async def rest_day(ctx, program_id: str, day: int, workout: bool):
    """Make DAY a rest day (or a workout day with --off)."""
    editor = ProgramEditor(get_db_path())
    updated = await editor.set_rest_day(program_id, day, not workout)
    kind = "rest" if updated.is_rest_day else "workout"
    echo_success(f"Day {day} is now a {kind} day")


@exercises.command("rename-day")
@click.argument("program_id")
@click.argument("day", type=int)
@click.argument("workout_type")
@click.pass_context
@async_command
@reports_errors
async def rename_day(ctx, program_id: str, day: int, workout_type: str):
    """Rename DAY's workout type."""
    editor = ProgramEditor(get_db_path())
    await editor.rename_day(program_id, day, workout_type)
    echo_success(f"Day {day} renamed to {workout_type!r}")
