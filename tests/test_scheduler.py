"""Tests for the scheduling engine."""

from datetime import date, datetime

import pytest

from repcycle.models.schedule import CompletedDays, Cursor, ProgramSchedule
from repcycle.models.template import Exercise, WorkoutDay, WorkoutTemplate
from repcycle.services.scheduler import (
    advance_cursor,
    compute_scheduled_date,
    is_final_session,
    map_template_to_week,
    recompute_percentage,
    scheduled_workouts_in_range,
)


def make_program(duration_weeks=3, days_per_week=7, slots=7, start=date(2024, 1, 1)):
    template = WorkoutTemplate(program_id="p1", name="Split", days_per_week=days_per_week)
    squat = Exercise(name="Squat", sets=3, reps=5)
    days = [
        WorkoutDay.build(template.id, n, "Rest" if n % 2 == 0 else f"Day {n}", [squat])
        for n in range(1, slots + 1)
    ]
    schedule = ProgramSchedule(
        user_id=1,
        program_id="p1",
        template_id=template.id,
        title="Test Program",
        start_date=start,
        duration_weeks=duration_weeks,
    )
    return schedule, template, days


class TestMapTemplateToWeek:
    """Tests for deriving a week from the template."""

    def test_same_inputs_same_output(self):
        schedule, template, days = make_program()
        first = map_template_to_week(template, days, 2, schedule.completed)
        second = map_template_to_week(template, days, 2, schedule.completed)
        assert first == second

    def test_sorted_by_day_number(self):
        _, template, days = make_program()
        sessions = map_template_to_week(template, list(reversed(days)), 1, CompletedDays())
        assert [s.day_number for s in sessions] == list(range(1, 8))

    def test_every_week_has_the_same_content(self):
        _, template, days = make_program()
        week1 = map_template_to_week(template, days, 1, CompletedDays())
        week9 = map_template_to_week(template, days, 9, CompletedDays())
        assert [s.name for s in week1] == [s.name for s in week9]
        assert all(s.week_number == 9 for s in week9)

    def test_week_past_duration_is_allowed(self):
        _, template, days = make_program(duration_weeks=2)
        assert len(map_template_to_week(template, days, 5, CompletedDays())) == 7

    def test_week_zero_rejected(self):
        _, template, days = make_program()
        with pytest.raises(ValueError):
            map_template_to_week(template, days, 0, CompletedDays())

    def test_completion_flag_per_week(self):
        """Test completing week 1 day 1 does not mark week 2 day 1."""
        _, template, days = make_program()
        completed = CompletedDays.of([(1, 1)])
        assert map_template_to_week(template, days, 1, completed)[0].is_completed
        assert not map_template_to_week(template, days, 2, completed)[0].is_completed

    def test_rest_days_carried_through(self):
        _, template, days = make_program()
        sessions = map_template_to_week(template, days, 1, CompletedDays())
        assert sessions[1].is_rest_day
        assert sessions[1].name == "Rest"
        assert sessions[1].exercises == ()
        assert sessions[1].session_key == "1-2"


class TestComputeScheduledDate:
    def test_first_day(self):
        assert compute_scheduled_date(date(2024, 1, 1), 1, 1) == date(2024, 1, 1)

    def test_last_day_of_first_week(self):
        assert compute_scheduled_date(date(2024, 1, 1), 1, 7) == date(2024, 1, 7)

    def test_second_week(self):
        assert compute_scheduled_date(date(2024, 1, 1), 2, 1) == date(2024, 1, 8)

    def test_accepts_datetime(self):
        start = datetime(2024, 3, 9, 23, 30)
        assert compute_scheduled_date(start, 1, 2) == date(2024, 3, 10)

    def test_crosses_year(self):
        assert compute_scheduled_date(date(2023, 12, 25), 2, 3) == date(2024, 1, 3)


class TestAdvanceCursor:
    """Tests for the resume cursor rules."""

    def test_mid_week(self):
        schedule, template, _ = make_program()
        assert advance_cursor(schedule, template, 1, 3) == Cursor(1, 4)

    def test_end_of_week_rolls_over(self):
        schedule, template, _ = make_program(duration_weeks=3)
        assert advance_cursor(schedule, template, 1, 7) == Cursor(2, 1)

    def test_last_session_keeps_cursor(self):
        schedule, template, _ = make_program(duration_weeks=3)
        schedule.current_week, schedule.current_day = 3, 7
        assert advance_cursor(schedule, template, 3, 7) == Cursor(3, 7)

    def test_uses_completed_session_not_stored_cursor(self):
        schedule, template, _ = make_program()
        schedule.current_week, schedule.current_day = 3, 1
        assert advance_cursor(schedule, template, 1, 2) == Cursor(1, 3)

    def test_declared_days_per_week_bounds_the_week(self):
        schedule, template, _ = make_program(days_per_week=3, slots=7)
        assert advance_cursor(schedule, template, 1, 3) == Cursor(2, 1)


class TestIsFinalSession:
    def test_final(self):
        schedule, template, _ = make_program(duration_weeks=2)
        assert is_final_session(schedule, template, 2, 7)

    def test_not_final(self):
        schedule, template, _ = make_program(duration_weeks=2)
        assert not is_final_session(schedule, template, 1, 7)
        assert not is_final_session(schedule, template, 2, 6)


class TestRecomputePercentage:
    def test_half(self):
        completed = CompletedDays.of([(1, d) for d in range(1, 8)])
        assert recompute_percentage(completed, 2, 7) == 0.5

    def test_rest_days_count(self):
        completed = CompletedDays.of([(1, 1), (1, 2)])
        assert recompute_percentage(completed, 1, 4) == 0.5

    def test_clamped_to_one(self):
        """Test keys from weeks past the duration cannot push past 100%."""
        completed = CompletedDays.of([(w, 1) for w in range(1, 6)])
        assert recompute_percentage(completed, 1, 2) == 1.0

    def test_no_slots(self):
        assert recompute_percentage(CompletedDays(), 0, 7) == 0.0


class TestScheduledWorkoutsInRange:
    def test_window_across_weeks(self):
        schedule, template, days = make_program(duration_weeks=2)
        workouts = scheduled_workouts_in_range(
            schedule, template, days, date(2024, 1, 6), date(2024, 1, 9)
        )
        assert [(w.week_number, w.day_number) for w in workouts] == [
            (1, 6),
            (1, 7),
            (2, 1),
            (2, 2),
        ]
        assert workouts[2].scheduled_date == date(2024, 1, 8)

    def test_before_start(self):
        schedule, template, days = make_program()
        assert scheduled_workouts_in_range(
            schedule, template, days, date(2023, 12, 1), date(2023, 12, 31)
        ) == []

    def test_after_end(self):
        schedule, template, days = make_program(duration_weeks=1)
        assert scheduled_workouts_in_range(
            schedule, template, days, date(2024, 1, 8), date(2024, 2, 1)
        ) == []

    def test_reversed_range(self):
        schedule, template, days = make_program()
        assert scheduled_workouts_in_range(
            schedule, template, days, date(2024, 1, 5), date(2024, 1, 1)
        ) == []
