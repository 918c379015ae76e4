"""Workout history and rest-day log models."""

from dataclasses import dataclass, field
from datetime import datetime

from .template import Exercise

REST_DAY_FEELINGS = ["Energized", "Good", "Normal", "Tired", "Sore"]

RECOVERY_ACTIVITIES = [
    "Stretching",
    "Light Walk",
    "Yoga",
    "Swimming",
    "Massage",
    "Foam Rolling",
    "Meditation",
]


@dataclass
class WorkoutHistoryEntry:
    """A completed session, frozen at completion time.

    The exercise snapshot is independent of later template edits.
    """

    program_id: str
    session_id: str  # "{week}-{day}"
    session_name: str
    completed_at: datetime
    duration_minutes: int
    exercises: list[Exercise] = field(default_factory=list)
    notes: str | None = None
    id: int | None = None

    @property
    def week_number(self) -> int:
        return int(self.session_id.split("-")[0])

    @property
    def day_number(self) -> int:
        return int(self.session_id.split("-")[1])

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "program_id": self.program_id,
            "session_id": self.session_id,
            "session_name": self.session_name,
            "completed_at": self.completed_at.isoformat(),
            "duration_minutes": self.duration_minutes,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "notes": self.notes,
        }


@dataclass
class RestDayLog:
    """How a rest day went: feeling, recovery activities and a note."""

    user_id: int
    program_id: str
    week_number: int
    day_number: int
    feeling: str = ""  # One of REST_DAY_FEELINGS, or free text
    activities: list[str] = field(default_factory=list)
    note: str = ""
    logged_at: datetime | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "program_id": self.program_id,
            "week_number": self.week_number,
            "day_number": self.day_number,
            "feeling": self.feeling,
            "activities": self.activities,
            "note": self.note,
            "logged_at": self.logged_at.isoformat() if self.logged_at else None,
        }
