"""Data models for repcycle."""

from .history import RestDayLog, WorkoutHistoryEntry
from .schedule import CompletedDays, Cursor, ProgramSchedule, ScheduleStatus, day_key
from .template import Exercise, WorkoutDay, WorkoutTemplate, estimate_duration
from .views import (
    CompletionState,
    ProgramSummary,
    ProgressStats,
    ScheduledWorkoutView,
    SessionView,
)

__all__ = [
    "CompletedDays",
    "CompletionState",
    "Cursor",
    "day_key",
    "estimate_duration",
    "Exercise",
    "ProgramSchedule",
    "ProgramSummary",
    "ProgressStats",
    "RestDayLog",
    "ScheduledWorkoutView",
    "ScheduleStatus",
    "SessionView",
    "WorkoutDay",
    "WorkoutHistoryEntry",
    "WorkoutTemplate",
]
