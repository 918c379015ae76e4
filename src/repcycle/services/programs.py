"""Program creation, lookup and calendar queries."""

import logging
from collections import defaultdict
from datetime import date, timedelta

from ..exceptions import InvalidScheduleError, SessionNotFoundError
from ..models.schedule import ProgramSchedule, ScheduleStatus
from ..models.template import MAX_TEMPLATE_DAYS, Exercise, WorkoutDay, WorkoutTemplate, new_id
from ..models.views import ProgramSummary, ScheduledWorkoutView, SessionView
from .base import ProgramService
from .scheduler import (
    advance_cursor,
    map_template_to_week,
    recompute_percentage,
    scheduled_workouts_in_range,
)

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 30

# (workout type, exercises) for each day-slot, day 1 first
WeeklyWorkouts = list[tuple[str, list[Exercise]]]


def _validate_program(duration_weeks: int, days_per_week: int, weekly_workouts: WeeklyWorkouts) -> None:
    if duration_weeks < 1:
        raise InvalidScheduleError(f"Duration must be at least 1 week, got {duration_weeks}")
    if not 1 <= days_per_week <= MAX_TEMPLATE_DAYS:
        raise InvalidScheduleError(f"Days per week must be 1-{MAX_TEMPLATE_DAYS}, got {days_per_week}")
    if not 1 <= len(weekly_workouts) <= MAX_TEMPLATE_DAYS:
        raise InvalidScheduleError(
            f"A template needs 1-{MAX_TEMPLATE_DAYS} days, got {len(weekly_workouts)}"
        )
    if days_per_week > len(weekly_workouts):
        raise InvalidScheduleError(
            f"Days per week ({days_per_week}) exceeds the {len(weekly_workouts)} template days"
        )


def _reconciled_status(schedule: ProgramSchedule, template: WorkoutTemplate) -> ScheduleStatus:
    """Status after a template edit, given the sessions still completed."""
    if schedule.completed.contains(schedule.duration_weeks, template.days_per_week):
        return ScheduleStatus.COMPLETED
    if schedule.status == ScheduleStatus.PAUSED:
        return schedule.status
    if schedule.completed:
        return ScheduleStatus.IN_PROGRESS
    return ScheduleStatus.ACTIVE


def _build_days(template_id: str, weekly_workouts: WeeklyWorkouts) -> list[WorkoutDay]:
    return [
        WorkoutDay.build(template_id, index + 1, workout_type, exercises)
        for index, (workout_type, exercises) in enumerate(weekly_workouts)
    ]


def _template_name(days_per_week: int) -> str:
    return f"{days_per_week}-Day Split"


class ProgramCatalog(ProgramService):
    """Creates programs and answers schedule and calendar queries."""

    async def create_program(
        self,
        user_id: int,
        title: str,
        description: str,
        icon: str,
        duration_weeks: int,
        days_per_week: int,
        weekly_workouts: WeeklyWorkouts,
        start_date: date | None = None,
    ) -> str:
        """Create a template, its days and an active schedule.

        Args:
            user_id: Owner of the program
            title: Display title, e.g. "12-Week Strength Program"
            description: Free-text description
            icon: Display icon
            duration_weeks: Number of weeks the template repeats for
            days_per_week: Declared training days per week
            weekly_workouts: (workout type, exercises) per day-slot; a slot
                named "Rest" or with no exercises is a rest day
            start_date: First day of the program (defaults to today)

        Returns:
            The new program ID
        """
        _validate_program(duration_weeks, days_per_week, weekly_workouts)

        program_id = new_id()
        template = WorkoutTemplate(
            program_id=program_id,
            name=_template_name(days_per_week),
            days_per_week=days_per_week,
            description=description,
        )
        days = _build_days(template.id, weekly_workouts)
        schedule = ProgramSchedule(
            user_id=user_id,
            program_id=program_id,
            template_id=template.id,
            title=title,
            description=description,
            icon=icon,
            start_date=start_date or date.today(),
            duration_weeks=duration_weeks,
            status=ScheduleStatus.ACTIVE,
        )

        await self.templates.create(template, days)
        await self.schedules.create(schedule)
        logger.info(
            "Created program %s (%r): %d weeks, %d day-slots starting %s",
            program_id,
            title,
            duration_weeks,
            len(days),
            schedule.start_date.isoformat(),
        )
        return program_id

    async def update_program(
        self,
        program_id: str,
        title: str,
        description: str,
        duration_weeks: int,
        days_per_week: int,
        weekly_workouts: WeeklyWorkouts,
    ) -> None:
        """Replace a program's template wholesale and update its schedule.

        Completed days are kept; the percentage is recomputed against the
        new duration and template size. The cursor is clamped into the new
        template and the status re-derived from what is still completed.
        """
        _validate_program(duration_weeks, days_per_week, weekly_workouts)
        schedule = await self._get_schedule(program_id)
        template = await self._get_template(schedule)

        template.name = _template_name(days_per_week)
        template.days_per_week = days_per_week
        template.description = description
        days = _build_days(template.id, weekly_workouts)

        schedule.title = title
        schedule.description = description
        schedule.duration_weeks = duration_weeks
        schedule.completion_percentage = recompute_percentage(
            schedule.completed, duration_weeks, len(days)
        )
        schedule.current_week = min(schedule.current_week, duration_weeks)
        schedule.current_day = min(schedule.current_day, days_per_week)
        was_completed = schedule.status == ScheduleStatus.COMPLETED
        schedule.status = _reconciled_status(schedule, template)
        # A reopened program resumes after the session it finished on
        if was_completed and schedule.status != ScheduleStatus.COMPLETED:
            if schedule.completed.contains(*schedule.cursor):
                schedule.current_week, schedule.current_day = advance_cursor(
                    schedule, template, *schedule.cursor
                )

        await self.templates.replace(template, days)
        await self.schedules.update(schedule)
        logger.info("Updated program %s: %d weeks, %d day-slots", program_id, duration_weeks, len(days))

    async def delete_program(self, program_id: str) -> None:
        """Delete a program with its template, history and rest-day logs."""
        await self._get_schedule(program_id)
        await self.schedules.delete_program(program_id)
        logger.info("Deleted program %s", program_id)

    async def get_program(self, program_id: str) -> ProgramSummary:
        """Program header data."""
        schedule = await self._get_schedule(program_id)
        template = await self._get_template(schedule)
        return self._summarize(schedule, template)

    async def list_programs(self, user_id: int) -> list[ProgramSummary]:
        """A user's programs, most recently modified first.

        Schedules whose template is missing are skipped.
        """
        summaries = []
        for schedule in await self.schedules.list_by_user(user_id):
            template = await self.templates.get(schedule.template_id)
            if template is None:
                logger.warning("Skipping program %s: template missing", schedule.program_id)
                continue
            summaries.append(self._summarize(schedule, template))
        return summaries

    async def get_active_program(self, user_id: int) -> ProgramSummary | None:
        """The user's most recently touched active program, if any."""
        schedule = await self.schedules.get_active(user_id)
        if schedule is None:
            return None
        template = await self._get_template(schedule)
        return self._summarize(schedule, template)

    async def get_week_workouts(self, program_id: str, week: int) -> list[SessionView]:
        """All sessions of a week, with completion flags."""
        schedule, template, days = await self._load(program_id)
        return map_template_to_week(template, days, week, schedule.completed)

    async def get_session(self, program_id: str, week: int, day: int) -> SessionView:
        """A single session."""
        if week < 1:
            raise SessionNotFoundError(program_id, week, day)
        for session in await self.get_week_workouts(program_id, week):
            if session.day_number == day:
                return session
        raise SessionNotFoundError(program_id, week, day)

    async def get_scheduled_workouts(
        self, user_id: int, start: date, end: date
    ) -> dict[date, list[ScheduledWorkoutView]]:
        """Sessions of all the user's programs between start and end, by date."""
        by_date: dict[date, list[ScheduledWorkoutView]] = defaultdict(list)
        for schedule in await self.schedules.list_by_user(user_id):
            template = await self.templates.get(schedule.template_id)
            if template is None:
                logger.warning("Skipping program %s: template missing", schedule.program_id)
                continue
            days = await self.templates.get_days(template.id)
            for workout in scheduled_workouts_in_range(schedule, template, days, start, end):
                by_date[workout.scheduled_date].append(workout)
        return dict(sorted(by_date.items()))

    async def get_todays_workouts(
        self, user_id: int, today: date | None = None
    ) -> list[ScheduledWorkoutView]:
        """Sessions scheduled for today."""
        today = today or date.today()
        scheduled = await self.get_scheduled_workouts(user_id, today, today)
        return scheduled.get(today, [])

    async def get_upcoming_workouts(
        self, user_id: int, limit: int = 5, today: date | None = None
    ) -> list[ScheduledWorkoutView]:
        """The next sessions after today, looking ahead 30 days."""
        today = today or date.today()
        scheduled = await self.get_scheduled_workouts(
            user_id, today + timedelta(days=1), today + timedelta(days=UPCOMING_WINDOW_DAYS)
        )
        upcoming = [w for workouts in scheduled.values() for w in workouts]
        return upcoming[:limit]

    def _summarize(self, schedule: ProgramSchedule, template: WorkoutTemplate) -> ProgramSummary:
        return ProgramSummary(
            id=schedule.program_id,
            title=schedule.title,
            description=schedule.description,
            icon=schedule.icon,
            total_weeks=schedule.duration_weeks,
            days_per_week=template.days_per_week,
            status=schedule.status,
            current_week=schedule.current_week,
            current_day=schedule.current_day,
            start_date=schedule.start_date,
            completion_percentage=schedule.completion_percentage,
            template_name=template.name,
        )
