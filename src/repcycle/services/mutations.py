"""Structural edits to a program's weekly template."""

import logging
from dataclasses import replace

from ..exceptions import IndexOutOfRangeError
from ..models.template import REST_DAY_LABEL, Exercise, WorkoutDay
from .base import ProgramService

logger = logging.getLogger(__name__)


def _check_index(exercises: list[Exercise], index: int) -> None:
    if not 0 <= index < len(exercises):
        raise IndexOutOfRangeError(index, len(exercises))


class ProgramEditor(ProgramService):
    """Edits template days of a live program.

    Template edits apply to every week of the program from now on. They
    never touch the schedule's completed days or percentage: history
    entries already hold their own snapshot of what was performed.
    """

    async def get_day(self, program_id: str, day_number: int) -> WorkoutDay:
        """A template day of a program."""
        _, _, day = await self._get_day(program_id, day_number)
        return day

    async def add_exercise(
        self, program_id: str, day_number: int, exercise: Exercise
    ) -> WorkoutDay:
        """Append an exercise to a day (a rest day becomes a workout day)."""
        _, _, day = await self._get_day(program_id, day_number)
        updated = day.with_exercises([*day.exercises, exercise])
        if day.is_rest_day:
            logger.info("Day %d of %s is no longer a rest day", day_number, program_id)
        return await self._save(program_id, updated)

    async def update_exercise(
        self, program_id: str, day_number: int, index: int, exercise: Exercise
    ) -> WorkoutDay:
        """Replace the exercise at index."""
        _, _, day = await self._get_day(program_id, day_number)
        exercises = list(day.exercises)
        _check_index(exercises, index)
        exercises[index] = exercise
        return await self._save(program_id, day.with_exercises(exercises))

    async def delete_exercise(
        self, program_id: str, day_number: int, index: int
    ) -> WorkoutDay:
        """Remove the exercise at index."""
        _, _, day = await self._get_day(program_id, day_number)
        exercises = list(day.exercises)
        _check_index(exercises, index)
        del exercises[index]
        return await self._save(program_id, day.with_exercises(exercises))

    async def replace_day_exercises(
        self, program_id: str, day_number: int, exercises: list[Exercise]
    ) -> WorkoutDay:
        """Replace a day's whole exercise list."""
        _, _, day = await self._get_day(program_id, day_number)
        return await self._save(program_id, day.with_exercises(exercises))

    async def set_rest_day(
        self, program_id: str, day_number: int, is_rest_day: bool
    ) -> WorkoutDay:
        """Swap a day between workout and rest.

        Workout to rest clears the exercises and duration. Rest to workout
        leaves an empty, editable day.
        """
        _, _, day = await self._get_day(program_id, day_number)
        if day.is_rest_day == is_rest_day:
            return day
        if is_rest_day:
            updated = replace(day, workout_type=REST_DAY_LABEL, is_rest_day=True)
        else:
            workout_type = "Workout" if day.workout_type == REST_DAY_LABEL else day.workout_type
            updated = replace(
                day, workout_type=workout_type, is_rest_day=False, exercises=[], estimated_duration=0
            )
        return await self._save(program_id, updated)

    async def rename_day(
        self, program_id: str, day_number: int, workout_type: str
    ) -> WorkoutDay:
        """Change a day's workout-type label."""
        _, _, day = await self._get_day(program_id, day_number)
        return await self._save(program_id, replace(day, workout_type=workout_type.strip()))

    async def rename_program(self, program_id: str, title: str) -> None:
        """Change the program's display title."""
        schedule = await self._get_schedule(program_id)
        schedule.title = title.strip()
        await self.schedules.update(schedule)
        logger.info("Renamed program %s to %r", program_id, schedule.title)

    async def _save(self, program_id: str, day: WorkoutDay) -> WorkoutDay:
        await self.templates.update_day(day)
        logger.info(
            "Updated day %d of %s: %d exercises, ~%d min",
            day.day_number,
            program_id,
            len(day.exercises),
            day.estimated_duration,
        )
        return day
