"""Progress and history recording for program schedules."""

import logging
from collections import Counter
from datetime import date, datetime, timedelta

from ..exceptions import InvalidScheduleError, SessionNotFoundError
from ..models.history import RestDayLog, WorkoutHistoryEntry
from ..models.schedule import Cursor, ProgramSchedule, ScheduleStatus, day_key
from ..models.template import WorkoutDay, WorkoutTemplate
from ..models.views import CompletionState, ProgressStats, SessionView
from .base import ProgramService
from .scheduler import (
    advance_cursor,
    is_final_session,
    map_day_to_session,
    recompute_percentage,
)

logger = logging.getLogger(__name__)


class ProgressRecorder(ProgramService):
    """Records completed sessions and maintains schedule progress."""

    async def complete_session(
        self,
        program_id: str,
        week: int,
        day: int,
        duration_seconds: int,
        notes: str | None = None,
    ) -> int:
        """Mark a session complete and log it to history.

        Everything is read and validated before writing, and the history
        entry and schedule progress are stored in one transaction. Completing
        the same session twice appends two history entries but the
        completed-day set (and so the percentage) only counts it once.

        Args:
            program_id: Program the session belongs to
            week: Week number of the session (1-based)
            day: Day number within the template (1-7)
            duration_seconds: Time spent; stored as whole minutes
            notes: Optional free-text notes for the history entry

        Returns:
            ID of the new history entry
        """
        schedule, template, days = await self._load(program_id)
        session = self._session_for(schedule, template, days, week, day)

        entry = WorkoutHistoryEntry(
            program_id=program_id,
            session_id=day_key(week, day),
            session_name=session.name,
            completed_at=datetime.now(),
            duration_minutes=max(int(duration_seconds), 0) // 60,
            exercises=list(session.exercises),
            notes=notes,
        )
        self._apply_completion(schedule, template, len(days), week, day)
        history_id = await self.history.record_completion(entry, schedule)

        logger.info(
            "Completed %s session %s (history %d): %.0f%% done, next %s",
            program_id,
            entry.session_id,
            history_id,
            schedule.completion_percentage * 100,
            schedule.get_position_display(),
        )
        return history_id

    async def get_completion_state(self, program_id: str) -> CompletionState:
        """Completed keys, percentage and status for a program."""
        schedule = await self._get_schedule(program_id)
        return CompletionState(
            completed_keys=schedule.completed.keys,
            percentage=schedule.completion_percentage,
            status=schedule.status,
        )

    async def get_history_entry(self, history_id: int) -> WorkoutHistoryEntry | None:
        """Get a history entry by ID."""
        return await self.history.get(history_id)

    async def get_history_for_program(self, program_id: str) -> list[WorkoutHistoryEntry]:
        """All history for a program, newest first."""
        await self._get_schedule(program_id)
        return await self.history.list_for_program(program_id)

    async def get_history_for_session(
        self, program_id: str, week: int, day: int
    ) -> list[WorkoutHistoryEntry]:
        """Every logged completion of one session, newest first."""
        return await self.history.list_for_session(program_id, day_key(week, day))

    async def log_rest_day(
        self,
        user_id: int,
        program_id: str,
        week: int,
        day: int,
        feeling: str = "",
        activities: list[str] | None = None,
        note: str = "",
        mark_complete: bool = False,
    ) -> int:
        """Save how a rest day went.

        With mark_complete the day is also added to the completed set, which
        counts toward the percentage like any other day-slot. No history
        entry is written for rest days.

        Returns:
            ID of the new rest-day log
        """
        schedule, template, days = await self._load(program_id)
        session = self._session_for(schedule, template, days, week, day)
        if not session.is_rest_day:
            logger.warning(
                "Logging rest-day notes for workout day %s of program %s",
                session.session_key,
                program_id,
            )

        log = RestDayLog(
            user_id=user_id,
            program_id=program_id,
            week_number=week,
            day_number=day,
            feeling=feeling,
            activities=[a for a in (activities or []) if a],
            note=note,
        )
        log_id = await self.rest_days.create(log)

        if mark_complete:
            self._apply_completion(schedule, template, len(days), week, day)
            await self.schedules.update_progress(schedule)

        logger.info("Logged rest day %s for program %s", session.session_key, program_id)
        return log_id

    async def get_rest_day_log(
        self, program_id: str, week: int, day: int
    ) -> RestDayLog | None:
        """Latest rest-day log for a session, if any."""
        return await self.rest_days.get_for_day(program_id, week, day)

    async def get_progress_stats(
        self, program_id: str, today: date | None = None
    ) -> ProgressStats:
        """Aggregate statistics from a program's history."""
        schedule = await self._get_schedule(program_id)
        entries = await self.history.list_for_program(program_id)
        if not entries:
            return ProgressStats(completion_rate=schedule.completion_percentage)

        total_duration = sum(e.duration_minutes for e in entries)
        by_week = Counter(e.week_number for e in entries)
        return ProgressStats(
            total_workouts=len(entries),
            total_duration=total_duration,
            current_streak=self._current_streak(entries, today or date.today()),
            completion_rate=schedule.completion_percentage,
            average_duration=total_duration // len(entries),
            sessions_by_week=dict(sorted(by_week.items())),
        )

    async def set_position(self, program_id: str, week: int, day: int) -> Cursor:
        """Move the resume cursor to a specific session."""
        schedule, template, days = await self._load(program_id)
        if not 1 <= week <= schedule.duration_weeks:
            raise InvalidScheduleError(
                f"Week {week} is outside 1-{schedule.duration_weeks}"
            )
        if not any(d.day_number == day for d in days):
            raise SessionNotFoundError(program_id, week, day)

        schedule.current_week = week
        schedule.current_day = day
        await self.schedules.update_progress(schedule)
        logger.info("Moved %s cursor to %s", program_id, schedule.get_position_display())
        return schedule.cursor

    async def pause(self, program_id: str) -> ScheduleStatus:
        """Pause a program."""
        return await self._set_status(program_id, ScheduleStatus.PAUSED)

    async def resume(self, program_id: str) -> ScheduleStatus:
        """Resume a paused program."""
        schedule = await self._get_schedule(program_id)
        status = ScheduleStatus.IN_PROGRESS if schedule.completed else ScheduleStatus.ACTIVE
        return await self._set_status(program_id, status)

    async def _set_status(self, program_id: str, status: ScheduleStatus) -> ScheduleStatus:
        schedule = await self._get_schedule(program_id)
        if schedule.status == ScheduleStatus.COMPLETED:
            raise InvalidScheduleError(f"Program {program_id} is already completed")
        schedule.status = status
        await self.schedules.update_progress(schedule)
        logger.info("Program %s is now %s", program_id, status.value)
        return status

    def _session_for(
        self,
        schedule: ProgramSchedule,
        template: WorkoutTemplate,
        days: list[WorkoutDay],
        week: int,
        day: int,
    ) -> SessionView:
        if week < 1:
            raise SessionNotFoundError(schedule.program_id, week, day)
        for template_day in days:
            if template_day.day_number == day:
                return map_day_to_session(template, template_day, week, schedule.completed)
        raise SessionNotFoundError(schedule.program_id, week, day)

    def _apply_completion(
        self,
        schedule: ProgramSchedule,
        template: WorkoutTemplate,
        days_in_template: int,
        week: int,
        day: int,
    ) -> None:
        """Add a session to the completed set and move the cursor past it."""
        schedule.completed = schedule.completed.with_day(week, day)
        schedule.completion_percentage = recompute_percentage(
            schedule.completed, schedule.duration_weeks, days_in_template
        )

        cursor = advance_cursor(schedule, template, week, day)
        schedule.current_week, schedule.current_day = cursor

        if is_final_session(schedule, template, week, day):
            schedule.status = ScheduleStatus.COMPLETED
        elif schedule.status in (ScheduleStatus.NOT_STARTED, ScheduleStatus.ACTIVE):
            schedule.status = ScheduleStatus.IN_PROGRESS

    @staticmethod
    def _current_streak(entries: list[WorkoutHistoryEntry], today: date) -> int:
        """Consecutive days with a workout, ending today or yesterday."""
        workout_days = {e.completed_at.date() for e in entries}
        day = today if today in workout_days else today - timedelta(days=1)
        streak = 0
        while day in workout_days:
            streak += 1
            day -= timedelta(days=1)
        return streak
