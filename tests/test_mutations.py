"""Tests for template editing."""

import pytest

from repcycle.exceptions import IndexOutOfRangeError, SessionNotFoundError
from repcycle.models.template import Exercise
from repcycle.services import ProgramCatalog, ProgramEditor, ProgressRecorder


class TestExerciseEdits:
    """Tests for adding, updating and deleting exercises."""

    @pytest.mark.asyncio
    async def test_add_recomputes_duration(self, db_path, program_id):
        editor = ProgramEditor(db_path)
        day = await editor.add_exercise(
            program_id, 1, Exercise(name="Dips", sets=3, reps=10, rest_seconds=90)
        )

        assert [ex.name for ex in day.exercises][-1] == "Dips"
        # 162 + 150 + 180 seconds
        assert day.estimated_duration == 8
        assert (await editor.get_day(program_id, 1)).estimated_duration == 8

    @pytest.mark.asyncio
    async def test_add_to_rest_day_makes_workout_day(self, db_path, program_id):
        editor = ProgramEditor(db_path)
        day = await editor.add_exercise(program_id, 2, Exercise(name="Plank", sets=3, reps=1))
        assert not day.is_rest_day
        assert len(day.exercises) == 1

    @pytest.mark.asyncio
    async def test_update(self, db_path, program_id):
        editor = ProgramEditor(db_path)
        day = await editor.update_exercise(
            program_id, 1, 1, Exercise(name="Push Press", sets=5, reps=5, weight=50)
        )
        assert [ex.name for ex in day.exercises] == ["Bench Press", "Push Press"]

    @pytest.mark.asyncio
    async def test_delete(self, db_path, program_id):
        editor = ProgramEditor(db_path)
        day = await editor.delete_exercise(program_id, 1, 0)
        assert [ex.name for ex in day.exercises] == ["Overhead Press"]
        assert day.estimated_duration == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [-1, 2, 10])
    async def test_index_out_of_range(self, db_path, program_id, index):
        editor = ProgramEditor(db_path)
        with pytest.raises(IndexOutOfRangeError):
            await editor.delete_exercise(program_id, 1, index)
        with pytest.raises(IndexOutOfRangeError):
            await editor.update_exercise(program_id, 1, index, Exercise(name="X", sets=1, reps=1))
        assert len((await editor.get_day(program_id, 1)).exercises) == 2

    @pytest.mark.asyncio
    async def test_missing_day(self, db_path, program_id):
        with pytest.raises(SessionNotFoundError):
            await ProgramEditor(db_path).add_exercise(
                program_id, 5, Exercise(name="Curl", sets=3, reps=12)
            )

    @pytest.mark.asyncio
    async def test_replace_day_exercises(self, db_path, program_id, pull_exercises):
        day = await ProgramEditor(db_path).replace_day_exercises(program_id, 1, pull_exercises)
        assert [ex.name for ex in day.exercises] == ["Barbell Row"]
        assert day.estimated_duration == 3


class TestDayEdits:
    @pytest.mark.asyncio
    async def test_workout_to_rest(self, db_path, program_id):
        day = await ProgramEditor(db_path).set_rest_day(program_id, 1, True)
        assert day.is_rest_day
        assert day.workout_type == "Rest"
        assert day.exercises == []
        assert day.estimated_duration == 0

    @pytest.mark.asyncio
    async def test_rest_to_workout(self, db_path, program_id):
        day = await ProgramEditor(db_path).set_rest_day(program_id, 2, False)
        assert not day.is_rest_day
        assert day.workout_type == "Workout"
        assert day.exercises == []

    @pytest.mark.asyncio
    async def test_rest_swap_keeps_completion(self, db_path, program_id):
        """Test template edits leave the completed set alone."""
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 1, 1, 0)
        await ProgramEditor(db_path).set_rest_day(program_id, 1, True)

        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset({"1-1"})
        assert state.percentage == pytest.approx(1 / 6)

    @pytest.mark.asyncio
    async def test_rename_day(self, db_path, program_id):
        editor = ProgramEditor(db_path)
        await editor.rename_day(program_id, 3, "  Back & Biceps ")
        week = await ProgramCatalog(db_path).get_week_workouts(program_id, 4)
        assert week[2].name == "Back & Biceps"

    @pytest.mark.asyncio
    async def test_rename_program(self, db_path, program_id):
        await ProgramEditor(db_path).rename_program(program_id, "Upper Lower")
        program = await ProgramCatalog(db_path).get_program(program_id)
        assert program.title == "Upper Lower"
