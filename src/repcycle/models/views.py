"""Read-only views handed to the CLI and web layers."""

from dataclasses import dataclass, field
from datetime import date

from .schedule import ScheduleStatus
from .template import Exercise


@dataclass(frozen=True)
class SessionView:
    """One day's occurrence of the template in a given week."""

    id: str
    week_number: int
    day_number: int
    name: str
    exercises: tuple[Exercise, ...]
    estimated_duration: int
    is_completed: bool = False
    is_rest_day: bool = False

    @property
    def session_key(self) -> str:
        return f"{self.week_number}-{self.day_number}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "week_number": self.week_number,
            "day_number": self.day_number,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "estimated_duration": self.estimated_duration,
            "is_completed": self.is_completed,
            "is_rest_day": self.is_rest_day,
        }


@dataclass(frozen=True)
class ScheduledWorkoutView:
    """A session resolved to a calendar date, for calendar/agenda views."""

    program_id: str
    program_name: str
    program_icon: str
    week_number: int
    day_number: int
    scheduled_date: date
    session: SessionView

    @property
    def is_completed(self) -> bool:
        return self.session.is_completed

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "program_id": self.program_id,
            "program_name": self.program_name,
            "program_icon": self.program_icon,
            "week_number": self.week_number,
            "day_number": self.day_number,
            "scheduled_date": self.scheduled_date.isoformat(),
            "is_completed": self.is_completed,
            "session": self.session.to_dict(),
        }


@dataclass(frozen=True)
class CompletionState:
    """Completed keys, percentage and status for one program."""

    completed_keys: frozenset[str]
    percentage: float
    status: ScheduleStatus

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "completed_keys": sorted(self.completed_keys),
            "percentage": self.percentage,
            "status": self.status.value,
        }


@dataclass
class ProgramSummary:
    """Program header data combined from the schedule and its template."""

    id: str
    title: str
    description: str
    icon: str
    total_weeks: int
    days_per_week: int
    status: ScheduleStatus
    current_week: int
    current_day: int
    start_date: date
    completion_percentage: float
    template_name: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "total_weeks": self.total_weeks,
            "days_per_week": self.days_per_week,
            "status": self.status.value,
            "current_week": self.current_week,
            "current_day": self.current_day,
            "start_date": self.start_date.isoformat(),
            "completion_percentage": self.completion_percentage,
            "template_name": self.template_name,
        }


@dataclass
class ProgressStats:
    """Aggregate workout statistics for a program."""

    total_workouts: int = 0
    total_duration: int = 0  # Minutes
    current_streak: int = 0  # Days
    completion_rate: float = 0.0  # 0.0 - 1.0
    average_duration: int = 0  # Minutes
    sessions_by_week: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_workouts": self.total_workouts,
            "total_duration": self.total_duration,
            "current_streak": self.current_streak,
            "completion_rate": self.completion_rate,
            "average_duration": self.average_duration,
            "sessions_by_week": self.sessions_by_week,
        }
