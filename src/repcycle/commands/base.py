"""Shared CLI utilities."""

import asyncio
import re
from functools import wraps

import click

from ..config import get_settings
from ..db import get_db_path
from ..exceptions import RepcycleError
from ..models.template import Exercise

# "Bench Press:3x8", "Bench Press:3x8@60", "Bench Press:3x8@60/120"
_EXERCISE_PATTERN = re.compile(
    r"^(?P<name>[^:]+):(?P<sets>\d+)x(?P<reps>\d+)"
    r"(?:@(?P<weight>\d+(?:\.\d+)?))?(?:/(?P<rest>\d+))?$"
)


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def reports_errors(f):
    """Decorator turning repcycle errors into a CLI error and exit code 1."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except RepcycleError as e:
            echo_error(str(e))
            raise click.exceptions.Exit(1)

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'repcycle init' first."
        )
        ctx.exit(1)


def default_user_id() -> int:
    return get_settings().default_user_id


def parse_exercise(spec: str) -> Exercise:
    """Parse "NAME:SETSxREPS[@WEIGHT][/REST_SECONDS]" into an Exercise."""
    match = _EXERCISE_PATTERN.match(spec.strip())
    if not match:
        raise click.BadParameter(
            f"Expected NAME:SETSxREPS[@WEIGHT][/REST], got {spec!r}"
        )
    weight = match.group("weight")
    rest = match.group("rest")
    return Exercise(
        name=match.group("name").strip(),
        sets=int(match.group("sets")),
        reps=int(match.group("reps")),
        weight=float(weight) if weight else None,
        rest_seconds=int(rest) if rest else 90,
    )


def parse_day(spec: str) -> tuple[str, list[Exercise]]:
    """Parse "TYPE=EXERCISE,EXERCISE" (or just "Rest") into a day-slot."""
    if "=" not in spec:
        return spec.strip(), []
    workout_type, exercises = spec.split("=", 1)
    return workout_type.strip(), [
        parse_exercise(item) for item in exercises.split(",") if item.strip()
    ]


def format_exercise(exercise: Exercise) -> str:
    """One-line exercise description."""
    text = f"{exercise.name}: {exercise.sets}x{exercise.reps}"
    if exercise.weight is not None:
        text += f" @ {exercise.weight:g}"
    return text + f" (rest {exercise.rest_seconds}s)"


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
