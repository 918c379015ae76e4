"""Progress tracking commands."""

import click

from ..db import get_db_path
from ..models.schedule import ScheduleStatus
from ..services import ProgramCatalog, ProgressRecorder
from .base import (
    async_command,
    default_user_id,
    echo_info,
    echo_success,
    ensure_initialized,
    format_exercise,
    format_table,
    reports_errors,
)
from .prompts import ask_rest_day


@click.group()
@click.pass_context
def progress(ctx):
    """Track program progress.

    Complete sessions, view the current position, log rest days and
    review workout history.
    """
    ensure_initialized(ctx)


@progress.command("status")
@click.argument("program_id")
@click.pass_context
@async_command
@reports_errors
async def status(ctx: click.Context, program_id: str):
    """Show progress status for a program.

    Displays the current position, completion percentage and the next
    session to perform.
    """
    db_path = get_db_path()
    catalog = ProgramCatalog(db_path)
    recorder = ProgressRecorder(db_path)

    program = await catalog.get_program(program_id)
    state = await recorder.get_completion_state(program_id)
    stats = await recorder.get_progress_stats(program_id)
    total_slots = len(await catalog.get_week_workouts(program_id, 1)) * program.total_weeks

    click.echo()
    click.echo(click.style(f"Program: {program.title}", bold=True))
    click.echo("=" * 50)
    click.echo(f"Status: {state.status.display}")
    click.echo(f"Position: Week {program.current_week}, Day {program.current_day}")
    click.echo(
        f"Progress: {state.percentage * 100:.1f}% "
        f"({len(state.completed_keys)}/{total_slots} sessions)"
    )
    click.echo(f"Workouts logged: {stats.total_workouts} ({stats.total_duration} min)")
    click.echo(f"Current streak: {stats.current_streak} day(s)")

    click.echo()
    if state.status == ScheduleStatus.COMPLETED:
        echo_success("Program complete!")
        return

    session = await catalog.get_session(program_id, program.current_week, program.current_day)
    click.echo(click.style("Next Session:", bold=True))
    click.echo(f"  Week {session.week_number}, Day {session.day_number}: {session.name}")
    if session.is_rest_day:
        click.echo("  Rest and recover.")
    else:
        click.echo(f"  ~{session.estimated_duration} min, {len(session.exercises)} exercises")


@progress.command("complete")
@click.argument("program_id")
@click.option("--week", "-w", type=int, help="Week of the session (default: current)")
@click.option("--day", "-d", type=int, help="Day of the session (default: current)")
@click.option("--minutes", "-m", type=int, default=0, help="Time spent in minutes")
@click.option("--notes", "-n", help="Notes for the history entry")
@click.pass_context
@async_command
@reports_errors
async def complete(
    ctx: click.Context,
    program_id: str,
    week: int | None,
    day: int | None,
    minutes: int,
    notes: str | None,
):
    """Mark a session as complete and advance."""
    db_path = get_db_path()
    catalog = ProgramCatalog(db_path)
    recorder = ProgressRecorder(db_path)

    program = await catalog.get_program(program_id)
    week = week or program.current_week
    day = day or program.current_day
    if week > program.total_weeks:
        echo_info(f"Week {week} is past the end of the program ({program.total_weeks} weeks)")

    history_id = await recorder.complete_session(program_id, week, day, minutes * 60, notes)
    program = await catalog.get_program(program_id)

    echo_success(f"Completed: Week {week}, Day {day} (history #{history_id})")
    click.echo(f"Progress: {program.completion_percentage * 100:.1f}%")
    if program.status == ScheduleStatus.COMPLETED:
        echo_success("Congratulations! Program complete!")
    else:
        click.echo(f"Next: Week {program.current_week}, Day {program.current_day}")


@progress.command("set")
@click.argument("program_id")
@click.argument("week", type=int)
@click.argument("day", type=int)
@click.pass_context
@async_command
@reports_errors
async def set_position(ctx: click.Context, program_id: str, week: int, day: int):
    """Set the current position to a specific week and day."""
    recorder = ProgressRecorder(get_db_path())
    cursor = await recorder.set_position(program_id, week, day)
    echo_success(f"Position set to Week {cursor.week}, Day {cursor.day}")


@progress.command("pause")
@click.argument("program_id")
@click.pass_context
@async_command
@reports_errors
async def pause(ctx: click.Context, program_id: str):
    """Pause a program."""
    recorder = ProgressRecorder(get_db_path())
    await recorder.pause(program_id)
    echo_success("Program paused")


@progress.command("resume")
@click.argument("program_id")
@click.pass_context
@async_command
@reports_errors
async def resume(ctx: click.Context, program_id: str):
    """Resume a paused program."""
    recorder = ProgressRecorder(get_db_path())
    new_status = await recorder.resume(program_id)
    echo_success(f"Program resumed ({new_status.value})")


@progress.command("history")
@click.argument("program_id")
@click.option("--entry", "-e", "history_id", type=int, help="Show one entry in detail")
@click.pass_context
@async_command
@reports_errors
async def history(ctx: click.Context, program_id: str, history_id: int | None):
    """Show workout history for a program."""
    recorder = ProgressRecorder(get_db_path())

    if history_id is not None:
        entry = await recorder.get_history_entry(history_id)
        if entry is None or entry.program_id != program_id:
            echo_info(f"No history entry #{history_id} for this program")
            return
        click.echo(f"#{entry.id} {entry.session_name} (Week {entry.week_number}, Day {entry.day_number})")
        click.echo(f"Completed: {entry.completed_at.strftime('%Y-%m-%d %H:%M')}, {entry.duration_minutes} min")
        for exercise in entry.exercises:
            click.echo(f"  - {format_exercise(exercise)}")
        if entry.notes:
            click.echo(f"Notes: {entry.notes}")
        return

    entries = await recorder.get_history_for_program(program_id)
    if not entries:
        echo_info("No workouts logged yet.")
        return

    rows = [
        [
            str(e.id),
            e.completed_at.strftime("%Y-%m-%d %H:%M"),
            e.session_id,
            e.session_name,
            f"{e.duration_minutes} min",
        ]
        for e in entries
    ]
    click.echo()
    click.echo(format_table(["ID", "Completed", "Session", "Name", "Duration"], rows))


@progress.command("rest")
@click.argument("program_id")
@click.argument("week", type=int)
@click.argument("day", type=int)
@click.option("--feeling", "-f", default="", help='e.g. "Energized", "Good", "Tired", "Sore"')
@click.option("--activity", "-a", "activities", multiple=True, help="Recovery activity (repeatable)")
@click.option("--note", default="", help="Free-text note")
@click.option("--complete/--no-complete", default=True, help="Count the rest day as done")
@click.option("--interactive", "-i", is_flag=True, help="Answer prompts instead of passing options")
@click.pass_context
@async_command
@reports_errors
async def rest(
    ctx: click.Context,
    program_id: str,
    week: int,
    day: int,
    feeling: str,
    activities: tuple[str, ...],
    note: str,
    complete: bool,
    interactive: bool,
):
    """Log how a rest day went."""
    if interactive:
        feeling, activities, note = await ask_rest_day(feeling, list(activities), note)
    recorder = ProgressRecorder(get_db_path())
    await recorder.log_rest_day(
        default_user_id(),
        program_id,
        week,
        day,
        feeling=feeling,
        activities=list(activities),
        note=note,
        mark_complete=complete,
    )
    echo_success(f"Rest day logged: Week {week}, Day {day}")
