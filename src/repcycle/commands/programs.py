"""Program management commands."""

import json
from pathlib import Path

import click

from ..db import get_db_path
from ..models.template import Exercise
from ..services import ProgramCatalog, ProgramEditor
from .base import (
    async_command,
    default_user_id,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_exercise,
    format_table,
    parse_day,
    reports_errors,
)


def _load_plan(path: Path) -> dict:
    """Read a program definition from a JSON file.

    Expected keys: title, weeks, days (a list of {workout_type, exercises})
    and optionally description, icon and days_per_week.
    """
    data = json.loads(path.read_text())
    return {
        "title": data["title"],
        "description": data.get("description", ""),
        "icon": data.get("icon", "💪"),
        "weeks": int(data["weeks"]),
        "days_per_week": data.get("days_per_week"),
        "weekly_workouts": [
            (day["workout_type"], [Exercise.from_dict(ex) for ex in day.get("exercises", [])])
            for day in data["days"]
        ],
    }


@click.group()
@click.pass_context
def programs(ctx):
    """Manage workout programs.

    Commands for creating, listing, viewing, renaming and deleting programs.
    """
    ensure_initialized(ctx)


@programs.command()
@click.argument("title", required=False)
@click.option("--weeks", "-w", type=int, default=4, show_default=True, help="Program duration in weeks")
@click.option("--days-per-week", "-d", type=int, help="Declared training days (default: non-rest days)")
@click.option(
    "--day",
    "day_specs",
    multiple=True,
    help='Day-slot in order, e.g. "Push=Bench Press:3x8@60,Dips:3x10" or "Rest"',
)
@click.option("--description", default="", help="Program description")
@click.option("--icon", default="💪", help="Display icon")
@click.option("--start", "start", type=click.DateTime(formats=["%Y-%m-%d"]), help="Start date (default: today)")
@click.option("--file", "plan_file", type=click.Path(exists=True, path_type=Path), help="JSON program definition")
@click.pass_context
@async_command
@reports_errors
async def create(
    ctx,
    title: str | None,
    weeks: int,
    days_per_week: int | None,
    day_specs: tuple[str, ...],
    description: str,
    icon: str,
    start,
    plan_file: Path | None,
):
    """Create a program from a weekly template.

    Examples:

        repcycle programs create "Strength Block" -w 8 \\
            --day "Upper=Bench Press:4x6@80,Row:4x8" --day Rest \\
            --day "Lower=Squat:5x5@100" --day Rest

        repcycle programs create --file plan.json
    """
    if plan_file:
        plan = _load_plan(plan_file)
        title = title or plan["title"]
        weeks = plan["weeks"]
        description = description or plan["description"]
        icon = plan["icon"]
        days_per_week = days_per_week or plan["days_per_week"]
        weekly_workouts = plan["weekly_workouts"]
    else:
        weekly_workouts = [parse_day(spec) for spec in day_specs]

    if not title:
        echo_error("A program title is required")
        ctx.exit(1)
    if not weekly_workouts:
        echo_error("Define at least one day with --day or --file")
        ctx.exit(1)

    if days_per_week is None:
        days_per_week = sum(1 for _, exercises in weekly_workouts if exercises) or 1

    catalog = ProgramCatalog(get_db_path())
    program_id = await catalog.create_program(
        user_id=default_user_id(),
        title=title,
        description=description,
        icon=icon,
        duration_weeks=weeks,
        days_per_week=days_per_week,
        weekly_workouts=weekly_workouts,
        start_date=start.date() if start else None,
    )
    echo_success(f"Created program {program_id}")


@programs.command(name="list")
@click.pass_context
@async_command
async def list_programs(ctx):
    """List all programs."""
    catalog = ProgramCatalog(get_db_path())
    summaries = await catalog.list_programs(default_user_id())

    if not summaries:
        echo_info("No programs found. Create one with 'repcycle programs create'")
        return

    headers = ["ID", "Title", "Weeks", "Days", "Status", "Position", "Progress"]
    rows = []
    for prog in summaries:
        rows.append([
            prog.id,
            prog.title[:30] + "..." if len(prog.title) > 30 else prog.title,
            str(prog.total_weeks),
            str(prog.days_per_week),
            prog.status.value,
            f"W{prog.current_week}D{prog.current_day}",
            f"{prog.completion_percentage * 100:.0f}%",
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(summaries)} program(s)")


@programs.command()
@click.argument("program_id")
@click.option("--week", "-w", type=int, help="Week to show (default: current week)")
@click.pass_context
@async_command
@reports_errors
async def show(ctx, program_id: str, week: int | None):
    """Show a program and one week of its schedule."""
    catalog = ProgramCatalog(get_db_path())
    program = await catalog.get_program(program_id)
    week = week or program.current_week

    click.echo()
    click.echo("=" * 60)
    click.echo(f"{program.icon} {program.title} (ID: {program.id})")
    click.echo("=" * 60)
    if program.description:
        click.echo(program.description)
    click.echo(f"Template: {program.template_name}, {program.total_weeks} weeks")
    click.echo(f"Started: {program.start_date.isoformat()}")
    click.echo(f"Status: {program.status.display}")
    click.echo(f"Position: Week {program.current_week}, Day {program.current_day}")
    click.echo(f"Progress: {program.completion_percentage * 100:.1f}%")

    if week > program.total_weeks:
        echo_info(f"Week {week} is past the end of the program ({program.total_weeks} weeks)")

    click.echo()
    click.echo(click.style(f"Week {week}:", bold=True))
    for session in await catalog.get_week_workouts(program_id, week):
        mark = click.style("[x]", fg="green") if session.is_completed else "[ ]"
        click.echo(f"  {mark} Day {session.day_number}: {session.name}")
        for exercise in session.exercises:
            click.echo(f"        - {format_exercise(exercise)}")


@programs.command()
@click.argument("program_id")
@click.argument("title")
@click.pass_context
@async_command
@reports_errors
async def rename(ctx, program_id: str, title: str):
    """Rename a program."""
    editor = ProgramEditor(get_db_path())
    await editor.rename_program(program_id, title)
    echo_success(f"Program {program_id} renamed to {title!r}")


@programs.command()
@click.argument("program_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
@reports_errors
async def delete(ctx, program_id: str, force: bool):
    """Delete a program with its history and rest-day logs."""
    catalog = ProgramCatalog(get_db_path())
    program = await catalog.get_program(program_id)

    if not force:
        click.echo(f"Program: {program.title}")
        if not click.confirm("Are you sure you want to delete this program?"):
            echo_info("Cancelled")
            return

    await catalog.delete_program(program_id)
    echo_success(f"Program {program_id} deleted")
