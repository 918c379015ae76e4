"""Data access layer for repcycle."""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.history import RestDayLog, WorkoutHistoryEntry
from ..models.schedule import CompletedDays, ProgramSchedule, ScheduleStatus
from ..models.template import Exercise, WorkoutDay, WorkoutTemplate
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _parse_exercises(raw: str | None) -> list[Exercise]:
    """Decode a stored exercise list, skipping entries that cannot be read."""
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding malformed exercise list: %r", raw[:80])
        return []
    exercises = []
    for item in items:
        try:
            exercises.append(Exercise.from_dict(item))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed exercise entry: %r", item)
    return exercises


async def _write_progress(db: aiosqlite.Connection, schedule: ProgramSchedule) -> None:
    schedule.updated_at = datetime.now()
    await db.execute(
        """
        UPDATE program_schedules SET
            current_week = ?, current_day = ?, completed_days = ?,
            completion_percentage = ?, status = ?, updated_at = ?
        WHERE id = ?
        """,
        (
            schedule.current_week,
            schedule.current_day,
            schedule.completed.to_json(),
            schedule.completion_percentage,
            schedule.status.value,
            schedule.updated_at.isoformat(),
            schedule.id,
        ),
    )


async def _insert_history(db: aiosqlite.Connection, entry: WorkoutHistoryEntry) -> None:
    cursor = await db.execute(
        """
        INSERT INTO workout_history
        (program_id, session_id, session_name, completed_at,
         duration_minutes, exercises, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            entry.program_id,
            entry.session_id,
            entry.session_name,
            entry.completed_at.isoformat(),
            entry.duration_minutes,
            json.dumps([ex.to_dict() for ex in entry.exercises]),
            entry.notes,
        ),
    )
    entry.id = cursor.lastrowid


class TemplateRepository:
    """Repository for workout templates and their day-slots."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, template: WorkoutTemplate, days: list[WorkoutDay]) -> str:
        """Create a template together with its days."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_templates
                (id, program_id, name, days_per_week, description, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    template.id,
                    template.program_id,
                    template.name,
                    template.days_per_week,
                    template.description,
                    (template.created_at or datetime.now()).isoformat(),
                ),
            )
            await self._insert_days(db, days)
            await db.commit()
            return template.id

    async def get(self, template_id: str) -> WorkoutTemplate | None:
        """Get a template by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_templates WHERE id = ?", (template_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_template(row)

    async def get_days(self, template_id: str) -> list[WorkoutDay]:
        """Get all days of a template, ordered by day number."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_days WHERE template_id = ? ORDER BY day_number",
                (template_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_day(row) for row in rows]

    async def get_day(self, template_id: str, day_number: int) -> WorkoutDay | None:
        """Get a single day-slot of a template."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_days WHERE template_id = ? AND day_number = ?",
                (template_id, day_number),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_day(row)

    async def update_day(self, day: WorkoutDay) -> None:
        """Persist an edited day."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_days SET
                    workout_type = ?, exercises = ?, is_rest_day = ?,
                    estimated_duration = ?
                WHERE id = ?
                """,
                (
                    day.workout_type,
                    json.dumps(day.exercises_to_dicts()),
                    int(day.is_rest_day),
                    day.estimated_duration,
                    day.id,
                ),
            )
            await db.commit()

    async def replace(self, template: WorkoutTemplate, days: list[WorkoutDay]) -> None:
        """Replace a template's metadata and all of its days."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_templates SET
                    name = ?, days_per_week = ?, description = ?
                WHERE id = ?
                """,
                (template.name, template.days_per_week, template.description, template.id),
            )
            await db.execute("DELETE FROM workout_days WHERE template_id = ?", (template.id,))
            await self._insert_days(db, days)
            await db.commit()

    async def _insert_days(self, db: aiosqlite.Connection, days: list[WorkoutDay]) -> None:
        await db.executemany(
            """
            INSERT INTO workout_days
            (id, template_id, day_number, workout_type, exercises, is_rest_day, estimated_duration)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    day.id,
                    day.template_id,
                    day.day_number,
                    day.workout_type,
                    json.dumps(day.exercises_to_dicts()),
                    int(day.is_rest_day),
                    day.estimated_duration,
                )
                for day in days
            ],
        )

    def _row_to_template(self, row: aiosqlite.Row) -> WorkoutTemplate:
        """Convert a database row to a WorkoutTemplate."""
        return WorkoutTemplate(
            id=row["id"],
            program_id=row["program_id"],
            name=row["name"],
            days_per_week=row["days_per_week"],
            description=row["description"] or "",
            created_at=_parse_timestamp(row["created_at"]),
        )

    def _row_to_day(self, row: aiosqlite.Row) -> WorkoutDay:
        """Convert a database row to a WorkoutDay."""
        return WorkoutDay(
            id=row["id"],
            template_id=row["template_id"],
            day_number=row["day_number"],
            workout_type=row["workout_type"],
            exercises=_parse_exercises(row["exercises"]),
            is_rest_day=bool(row["is_rest_day"]),
            estimated_duration=row["estimated_duration"],
        )


class ScheduleRepository:
    """Repository for program schedules."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, schedule: ProgramSchedule) -> str:
        """Create a new schedule."""
        now = datetime.now()
        schedule.created_at = schedule.created_at or now
        schedule.updated_at = schedule.updated_at or now
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO program_schedules
                (id, user_id, program_id, template_id, title, description, icon,
                 start_date, duration_weeks, current_week, current_day, completed_days,
                 status, completion_percentage, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    schedule.id,
                    schedule.user_id,
                    schedule.program_id,
                    schedule.template_id,
                    schedule.title,
                    schedule.description,
                    schedule.icon,
                    schedule.start_date.isoformat(),
                    schedule.duration_weeks,
                    schedule.current_week,
                    schedule.current_day,
                    schedule.completed.to_json(),
                    schedule.status.value,
                    schedule.completion_percentage,
                    schedule.created_at.isoformat(),
                    schedule.updated_at.isoformat(),
                ),
            )
            await db.commit()
            return schedule.id

    async def get_by_program(self, program_id: str) -> ProgramSchedule | None:
        """Get the schedule for a program."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM program_schedules WHERE program_id = ?", (program_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_schedule(row)

    async def list_by_user(self, user_id: int) -> list[ProgramSchedule]:
        """List a user's schedules, most recently modified first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM program_schedules WHERE user_id = ? ORDER BY updated_at DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_schedule(row) for row in rows]

    async def get_active(self, user_id: int) -> ProgramSchedule | None:
        """Get the user's most recently touched active or in-progress schedule."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM program_schedules
                WHERE user_id = ? AND status IN (?, ?)
                ORDER BY updated_at DESC LIMIT 1
                """,
                (user_id, ScheduleStatus.ACTIVE.value, ScheduleStatus.IN_PROGRESS.value),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_schedule(row)

    async def update(self, schedule: ProgramSchedule) -> None:
        """Update the editable fields of an existing schedule."""
        schedule.updated_at = datetime.now()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE program_schedules SET
                    title = ?, description = ?, icon = ?, duration_weeks = ?,
                    current_week = ?, current_day = ?, completed_days = ?,
                    status = ?, completion_percentage = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    schedule.title,
                    schedule.description,
                    schedule.icon,
                    schedule.duration_weeks,
                    schedule.current_week,
                    schedule.current_day,
                    schedule.completed.to_json(),
                    schedule.status.value,
                    schedule.completion_percentage,
                    schedule.updated_at.isoformat(),
                    schedule.id,
                ),
            )
            await db.commit()

    async def update_progress(self, schedule: ProgramSchedule) -> None:
        """Persist cursor, completed days, percentage and status in one statement."""
        async with connect(self.db_path) as db:
            await _write_progress(db, schedule)
            await db.commit()

    async def delete_program(self, program_id: str) -> None:
        """Delete a program's schedule, template, days, history and rest-day logs."""
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_history WHERE program_id = ?", (program_id,))
            await db.execute("DELETE FROM rest_day_logs WHERE program_id = ?", (program_id,))
            await db.execute(
                """
                DELETE FROM workout_days WHERE template_id IN
                    (SELECT id FROM workout_templates WHERE program_id = ?)
                """,
                (program_id,),
            )
            await db.execute("DELETE FROM workout_templates WHERE program_id = ?", (program_id,))
            await db.execute("DELETE FROM program_schedules WHERE program_id = ?", (program_id,))
            await db.commit()

    def _row_to_schedule(self, row: aiosqlite.Row) -> ProgramSchedule:
        """Convert a database row to a ProgramSchedule."""
        return ProgramSchedule(
            id=row["id"],
            user_id=row["user_id"],
            program_id=row["program_id"],
            template_id=row["template_id"],
            title=row["title"],
            description=row["description"] or "",
            icon=row["icon"] or "",
            start_date=date.fromisoformat(row["start_date"]),
            duration_weeks=row["duration_weeks"],
            current_week=row["current_week"],
            current_day=row["current_day"],
            completed=CompletedDays.from_json(row["completed_days"]),
            status=ScheduleStatus.parse(row["status"]),
            completion_percentage=row["completion_percentage"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class HistoryRepository:
    """Repository for the append-only workout history."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def record_completion(
        self, entry: WorkoutHistoryEntry, schedule: ProgramSchedule
    ) -> int:
        """Append a history entry and persist the schedule's progress together.

        Both writes share one transaction, so a failure leaves neither.
        """
        async with connect(self.db_path) as db:
            await _insert_history(db, entry)
            await _write_progress(db, schedule)
            await db.commit()
        return entry.id

    async def get(self, history_id: int) -> WorkoutHistoryEntry | None:
        """Get a history entry by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_history WHERE id = ?", (history_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def list_for_program(self, program_id: str) -> list[WorkoutHistoryEntry]:
        """List a program's history, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_history WHERE program_id = ?
                ORDER BY completed_at DESC, id DESC
                """,
                (program_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def list_for_session(
        self, program_id: str, session_id: str
    ) -> list[WorkoutHistoryEntry]:
        """List every completion of one session, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_history
                WHERE program_id = ? AND session_id = ?
                ORDER BY completed_at DESC, id DESC
                """,
                (program_id, session_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def count_for_program(self, program_id: str) -> int:
        """Count completed sessions logged for a program."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM workout_history WHERE program_id = ?", (program_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    def _row_to_entry(self, row: aiosqlite.Row) -> WorkoutHistoryEntry:
        """Convert a database row to a WorkoutHistoryEntry."""
        return WorkoutHistoryEntry(
            id=row["id"],
            program_id=row["program_id"],
            session_id=row["session_id"],
            session_name=row["session_name"],
            completed_at=datetime.fromisoformat(row["completed_at"]),
            duration_minutes=row["duration_minutes"],
            exercises=_parse_exercises(row["exercises"]),
            notes=row["notes"],
        )


class RestDayLogRepository:
    """Repository for rest-day logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, log: RestDayLog) -> int:
        """Store a rest-day log."""
        log.logged_at = log.logged_at or datetime.now()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO rest_day_logs
                (user_id, program_id, week_number, day_number, feeling, activities, note, logged_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.user_id,
                    log.program_id,
                    log.week_number,
                    log.day_number,
                    log.feeling,
                    json.dumps(log.activities),
                    log.note,
                    log.logged_at.isoformat(),
                ),
            )
            await db.commit()
            log.id = cursor.lastrowid
            return cursor.lastrowid

    async def get_for_day(
        self, program_id: str, week_number: int, day_number: int
    ) -> RestDayLog | None:
        """Get the latest log for a rest day."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM rest_day_logs
                WHERE program_id = ? AND week_number = ? AND day_number = ?
                ORDER BY logged_at DESC, id DESC LIMIT 1
                """,
                (program_id, week_number, day_number),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def list_for_program(self, program_id: str) -> list[RestDayLog]:
        """List a program's rest-day logs, newest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM rest_day_logs WHERE program_id = ? ORDER BY logged_at DESC, id DESC",
                (program_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    def _row_to_log(self, row: aiosqlite.Row) -> RestDayLog:
        """Convert a database row to a RestDayLog."""
        return RestDayLog(
            id=row["id"],
            user_id=row["user_id"],
            program_id=row["program_id"],
            week_number=row["week_number"],
            day_number=row["day_number"],
            feeling=row["feeling"] or "",
            activities=json.loads(row["activities"]) if row["activities"] else [],
            note=row["note"] or "",
            logged_at=_parse_timestamp(row["logged_at"]),
        )
