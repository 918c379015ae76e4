"""Tests for progress recording."""

from datetime import date, datetime, timedelta

import aiosqlite
import pytest

from repcycle.db import repositories
from repcycle.exceptions import InvalidScheduleError, ScheduleNotFoundError, SessionNotFoundError
from repcycle.models.history import WorkoutHistoryEntry
from repcycle.models.schedule import ScheduleStatus
from repcycle.models.template import Exercise
from repcycle.services import ProgramCatalog, ProgramEditor, ProgressRecorder


class TestCompleteSession:
    """Tests for completing sessions."""

    @pytest.mark.asyncio
    async def test_first_completion(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        history_id = await recorder.complete_session(program_id, 1, 1, 2700, notes="Felt strong")

        entry = await recorder.get_history_entry(history_id)
        assert entry.session_id == "1-1"
        assert entry.session_name == "Push"
        assert entry.duration_minutes == 45
        assert entry.notes == "Felt strong"
        assert [ex.name for ex in entry.exercises] == ["Bench Press", "Overhead Press"]

        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset({"1-1"})
        assert state.percentage == pytest.approx(1 / 6)
        assert state.status == ScheduleStatus.IN_PROGRESS

        program = await ProgramCatalog(db_path).get_program(program_id)
        assert (program.current_week, program.current_day) == (1, 2)

    @pytest.mark.asyncio
    async def test_completing_twice(self, db_path, program_id):
        """Test a repeat completion logs history but counts once."""
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 1, 1, 600)
        await recorder.complete_session(program_id, 1, 1, 900)

        history = await recorder.get_history_for_session(program_id, 1, 1)
        assert len(history) == 2
        state = await recorder.get_completion_state(program_id)
        assert len(state.completed_keys) == 1
        assert state.percentage == pytest.approx(1 / 6)

    @pytest.mark.asyncio
    async def test_end_of_week_rolls_cursor(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 1, 3, 0)
        program = await ProgramCatalog(db_path).get_program(program_id)
        assert (program.current_week, program.current_day) == (2, 1)

    @pytest.mark.asyncio
    async def test_final_session_completes_program(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        for week in (1, 2):
            for day in (1, 2, 3):
                await recorder.complete_session(program_id, week, day, 60)

        state = await recorder.get_completion_state(program_id)
        assert state.status == ScheduleStatus.COMPLETED
        assert state.percentage == 1.0

        program = await ProgramCatalog(db_path).get_program(program_id)
        assert (program.current_week, program.current_day) == (2, 3)

    @pytest.mark.asyncio
    async def test_week_past_duration_does_not_exceed_full(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 5, 1, 0)
        state = await recorder.get_completion_state(program_id)
        assert "5-1" in state.completed_keys
        assert 0.0 <= state.percentage <= 1.0

    @pytest.mark.asyncio
    async def test_negative_duration_clamped(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        history_id = await recorder.complete_session(program_id, 1, 1, -30)
        assert (await recorder.get_history_entry(history_id)).duration_minutes == 0

    @pytest.mark.asyncio
    async def test_unknown_program(self, db_path):
        recorder = ProgressRecorder(db_path)
        with pytest.raises(ScheduleNotFoundError):
            await recorder.complete_session("missing", 1, 1, 0)

    @pytest.mark.asyncio
    async def test_unknown_day_writes_nothing(self, db_path, program_id):
        """Test validation happens before any write."""
        recorder = ProgressRecorder(db_path)
        with pytest.raises(SessionNotFoundError):
            await recorder.complete_session(program_id, 1, 6, 0)

        assert await recorder.get_history_for_program(program_id) == []
        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset()
        assert state.status == ScheduleStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_history_survives_template_edit(self, db_path, program_id):
        """Test history keeps the exercises performed, not the current template."""
        recorder = ProgressRecorder(db_path)
        history_id = await recorder.complete_session(program_id, 1, 1, 0)
        await recorder.complete_session(program_id, 1, 2, 0)
        before = await recorder.get_completion_state(program_id)

        editor = ProgramEditor(db_path)
        await editor.delete_exercise(program_id, 1, 0)
        after_delete = await recorder.get_completion_state(program_id)
        assert after_delete.completed_keys == frozenset({"1-1", "1-2"})
        assert after_delete.percentage == pytest.approx(before.percentage)
        assert after_delete.status == ScheduleStatus.IN_PROGRESS

        await editor.add_exercise(program_id, 3, Exercise(name="Pull-up", sets=3, reps=5))
        await editor.update_exercise(program_id, 1, 0, Exercise(name="Dips", sets=3, reps=12))
        await editor.set_rest_day(program_id, 2, False)
        assert await recorder.get_completion_state(program_id) == after_delete

        entry = await recorder.get_history_entry(history_id)
        assert [ex.name for ex in entry.exercises] == ["Bench Press", "Overhead Press"]


    @pytest.mark.asyncio
    async def test_failed_progress_write_keeps_no_history(self, db_path, program_id, monkeypatch):
        """Test history and progress are written together or not at all."""
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 1, 1, 0)

        async def broken_write(db, schedule):
            raise aiosqlite.OperationalError("disk I/O error")

        monkeypatch.setattr(repositories, "_write_progress", broken_write)
        with pytest.raises(aiosqlite.OperationalError):
            await recorder.complete_session(program_id, 1, 2, 0)
        monkeypatch.undo()

        assert [e.session_id for e in await recorder.get_history_for_program(program_id)] == ["1-1"]
        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset({"1-1"})
        program = await ProgramCatalog(db_path).get_program(program_id)
        assert (program.current_week, program.current_day) == (1, 2)

class TestRestDays:
    @pytest.mark.asyncio
    async def test_log_rest_day(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        log_id = await recorder.log_rest_day(
            1, program_id, 1, 2, feeling="Sore", activities=["Stretching", ""], note="Walked"
        )

        log = await recorder.get_rest_day_log(program_id, 1, 2)
        assert log.id == log_id
        assert log.feeling == "Sore"
        assert log.activities == ["Stretching"]
        assert log.logged_at is not None

        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset()
        assert await recorder.get_history_for_program(program_id) == []

    @pytest.mark.asyncio
    async def test_log_rest_day_marks_complete(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        await recorder.log_rest_day(1, program_id, 1, 2, mark_complete=True)

        state = await recorder.get_completion_state(program_id)
        assert state.completed_keys == frozenset({"1-2"})
        assert state.percentage == pytest.approx(1 / 6)

    @pytest.mark.asyncio
    async def test_no_log(self, db_path, program_id):
        assert await ProgressRecorder(db_path).get_rest_day_log(program_id, 2, 2) is None


class TestPosition:
    @pytest.mark.asyncio
    async def test_set_position(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        cursor = await recorder.set_position(program_id, 2, 3)
        assert cursor == (2, 3)

    @pytest.mark.asyncio
    async def test_week_out_of_range(self, db_path, program_id):
        with pytest.raises(InvalidScheduleError):
            await ProgressRecorder(db_path).set_position(program_id, 3, 1)

    @pytest.mark.asyncio
    async def test_day_out_of_range(self, db_path, program_id):
        with pytest.raises(SessionNotFoundError):
            await ProgressRecorder(db_path).set_position(program_id, 1, 4)


class TestStatus:
    @pytest.mark.asyncio
    async def test_pause_and_resume(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        assert await recorder.pause(program_id) == ScheduleStatus.PAUSED
        assert await recorder.resume(program_id) == ScheduleStatus.ACTIVE

        await recorder.complete_session(program_id, 1, 1, 0)
        await recorder.pause(program_id)
        assert await recorder.resume(program_id) == ScheduleStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_completed_program_cannot_pause(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        await recorder.set_position(program_id, 2, 3)
        await recorder.complete_session(program_id, 2, 3, 0)
        with pytest.raises(InvalidScheduleError):
            await recorder.pause(program_id)


class TestProgressStats:
    @pytest.mark.asyncio
    async def test_empty(self, db_path, program_id):
        stats = await ProgressRecorder(db_path).get_progress_stats(program_id)
        assert stats.total_workouts == 0
        assert stats.current_streak == 0

    @pytest.mark.asyncio
    async def test_aggregates(self, db_path, program_id):
        recorder = ProgressRecorder(db_path)
        await recorder.complete_session(program_id, 1, 1, 1800)
        await recorder.complete_session(program_id, 1, 3, 3600)
        await recorder.complete_session(program_id, 2, 1, 2400)

        stats = await recorder.get_progress_stats(program_id)
        assert stats.total_workouts == 3
        assert stats.total_duration == 130
        assert stats.average_duration == 43
        assert stats.sessions_by_week == {1: 2, 2: 1}
        assert stats.completion_rate == pytest.approx(3 / 6)
        assert stats.current_streak == 1

    def test_streak_counts_back_from_yesterday(self):
        today = date(2024, 1, 10)

        def entry(days_ago):
            return WorkoutHistoryEntry(
                program_id="p",
                session_id="1-1",
                session_name="Push",
                completed_at=datetime(2024, 1, 10, 18) - timedelta(days=days_ago),
                duration_minutes=30,
            )

        entries = [entry(1), entry(2), entry(3), entry(5)]
        assert ProgressRecorder._current_streak(entries, today) == 3
        assert ProgressRecorder._current_streak([entry(0), *entries], today) == 4
        assert ProgressRecorder._current_streak([entry(2)], today) == 0
