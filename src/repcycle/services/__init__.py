"""Scheduling engine and program services."""

from .mutations import ProgramEditor
from .programs import ProgramCatalog
from .progress import ProgressRecorder
from .scheduler import (
    advance_cursor,
    compute_scheduled_date,
    is_final_session,
    map_day_to_session,
    map_template_to_week,
    recompute_percentage,
    scheduled_workouts_in_range,
)

__all__ = [
    "advance_cursor",
    "compute_scheduled_date",
    "is_final_session",
    "map_day_to_session",
    "map_template_to_week",
    "ProgramCatalog",
    "ProgramEditor",
    "ProgressRecorder",
    "recompute_percentage",
    "scheduled_workouts_in_range",
]
