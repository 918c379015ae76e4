"""CLI commands for repcycle."""

from .calendar import calendar
from .exercises import exercises
from .init import init
from .programs import programs
from .progress import progress
from .serve import serve

__all__ = [
    "calendar",
    "exercises",
    "init",
    "programs",
    "progress",
    "serve",
]
