"""Shared lookups for the program services."""

import logging
from pathlib import Path

from ..db.repositories import (
    HistoryRepository,
    RestDayLogRepository,
    ScheduleRepository,
    TemplateRepository,
)
from ..exceptions import ScheduleNotFoundError, SessionNotFoundError, TemplateNotFoundError
from ..models.schedule import ProgramSchedule
from ..models.template import WorkoutDay, WorkoutTemplate

logger = logging.getLogger(__name__)


class ProgramService:
    """Base class wiring repositories and resolving schedule/template pairs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path
        self.templates = TemplateRepository(db_path)
        self.schedules = ScheduleRepository(db_path)
        self.history = HistoryRepository(db_path)
        self.rest_days = RestDayLogRepository(db_path)

    async def _get_schedule(self, program_id: str) -> ProgramSchedule:
        schedule = await self.schedules.get_by_program(program_id)
        if schedule is None:
            raise ScheduleNotFoundError(program_id)
        return schedule

    async def _get_template(self, schedule: ProgramSchedule) -> WorkoutTemplate:
        template = await self.templates.get(schedule.template_id)
        if template is None:
            logger.error(
                "Schedule %s references missing template %s",
                schedule.id,
                schedule.template_id,
            )
            raise TemplateNotFoundError(schedule.template_id, schedule.program_id)
        return template

    async def _load(
        self, program_id: str
    ) -> tuple[ProgramSchedule, WorkoutTemplate, list[WorkoutDay]]:
        """Load a program's schedule, template and days."""
        schedule = await self._get_schedule(program_id)
        template = await self._get_template(schedule)
        days = await self.templates.get_days(template.id)
        logger.debug("Loaded program %s with %d template days", program_id, len(days))
        return schedule, template, days

    async def _get_day(
        self, program_id: str, day_number: int, week_number: int = 1
    ) -> tuple[ProgramSchedule, WorkoutTemplate, WorkoutDay]:
        """Load a single template day of a program."""
        schedule = await self._get_schedule(program_id)
        template = await self._get_template(schedule)
        day = await self.templates.get_day(template.id, day_number)
        if day is None:
            raise SessionNotFoundError(program_id, week_number, day_number)
        return schedule, template, day
