"""Scheduling engine for recurring weekly templates.

A program stores one week-long template and a duration in weeks. Every
week of the program is derived from that template on demand: day 3 of
week 9 has the same content as day 3 of week 1. The functions here are
pure and never touch storage, so the same inputs always give the same
results and they are safe to call from async code.
"""

from datetime import date, datetime, timedelta

from ..models.schedule import CompletedDays, Cursor, ProgramSchedule
from ..models.template import MAX_TEMPLATE_DAYS, WorkoutDay, WorkoutTemplate
from ..models.views import ScheduledWorkoutView, SessionView

DAYS_PER_CALENDAR_WEEK = 7


def map_day_to_session(
    template: WorkoutTemplate,
    day: WorkoutDay,
    week_number: int,
    completed: CompletedDays,
) -> SessionView:
    """Build the session view for one template day in a given week."""
    return SessionView(
        id=f"{template.id}-{day.day_number}",
        week_number=week_number,
        day_number=day.day_number,
        name=day.display_name,
        exercises=tuple(day.exercises),
        estimated_duration=day.estimated_duration,
        is_completed=completed.contains(week_number, day.day_number),
        is_rest_day=day.is_rest_day,
    )


def map_template_to_week(
    template: WorkoutTemplate,
    days: list[WorkoutDay],
    week_number: int,
    completed: CompletedDays,
) -> list[SessionView]:
    """Map the template's days onto a week.

    Weeks past the program's duration are allowed; callers decide
    whether to let users navigate there.
    """
    if week_number < 1:
        raise ValueError(f"Week number must be >= 1, got {week_number}")
    ordered = sorted(days, key=lambda d: d.day_number)
    return [map_day_to_session(template, day, week_number, completed) for day in ordered]


def compute_scheduled_date(
    start_date: date | datetime, week_number: int, day_number: int
) -> date:
    """Calendar date of a session.

    Day 1 is the program's first day; the offset is linear and makes no
    assumption about weekdays. Arithmetic is done on dates, not instants,
    so daylight-saving changes cannot shift a session.
    """
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    offset = (week_number - 1) * DAYS_PER_CALENDAR_WEEK + (day_number - 1)
    return start_date + timedelta(days=offset)


def advance_cursor(
    schedule: ProgramSchedule,
    template: WorkoutTemplate,
    completed_week: int,
    completed_day: int,
) -> Cursor:
    """Next cursor position after completing (completed_week, completed_day).

    Derived from the completed session, not from the stored cursor, so
    replays and out-of-order completions still give a well-defined result.
    On the last day of the last week the stored cursor is returned as-is.
    """
    last_slot = template.days_per_week
    if completed_day == last_slot and completed_week < schedule.duration_weeks:
        return Cursor(completed_week + 1, 1)
    if completed_day < last_slot:
        return Cursor(completed_week, completed_day + 1)
    return schedule.cursor


def is_final_session(
    schedule: ProgramSchedule,
    template: WorkoutTemplate,
    completed_week: int,
    completed_day: int,
) -> bool:
    """True when completing this session finishes the program."""
    return (
        completed_week >= schedule.duration_weeks
        and completed_day >= template.days_per_week
    )


def recompute_percentage(
    completed: CompletedDays, duration_weeks: int, days_in_template: int
) -> float:
    """Fraction of all template day-slots completed, rest days included."""
    total_slots = duration_weeks * min(days_in_template, MAX_TEMPLATE_DAYS)
    if total_slots <= 0:
        return 0.0
    return min(max(len(completed) / total_slots, 0.0), 1.0)


def scheduled_workouts_in_range(
    schedule: ProgramSchedule,
    template: WorkoutTemplate,
    days: list[WorkoutDay],
    start: date,
    end: date,
) -> list[ScheduledWorkoutView]:
    """Sessions of one program whose dates fall within [start, end]."""
    if end < start or not days:
        return []

    first_week = max(1, (start - schedule.start_date).days // DAYS_PER_CALENDAR_WEEK + 1)
    last_week = min(
        schedule.duration_weeks,
        (end - schedule.start_date).days // DAYS_PER_CALENDAR_WEEK + 1,
    )

    scheduled = []
    for week in range(first_week, last_week + 1):
        for session in map_template_to_week(template, days, week, schedule.completed):
            when = compute_scheduled_date(schedule.start_date, week, session.day_number)
            if start <= when <= end:
                scheduled.append(
                    ScheduledWorkoutView(
                        program_id=schedule.program_id,
                        program_name=schedule.title,
                        program_icon=schedule.icon,
                        week_number=week,
                        day_number=session.day_number,
                        scheduled_date=when,
                        session=session,
                    )
                )
    scheduled.sort(key=lambda s: (s.scheduled_date, s.day_number))
    return scheduled
