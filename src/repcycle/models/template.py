"""Weekly workout template data models."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

MAX_TEMPLATE_DAYS = 7
REST_DAY_LABEL = "Rest"

# Average time under tension per rep, used for duration estimates
SECONDS_PER_REP = 3


def new_id() -> str:
    """Generate a new string identifier."""
    return uuid.uuid4().hex


@dataclass
class Exercise:
    """An exercise prescribed on a template day."""

    name: str
    sets: int
    reps: int
    weight: float | None = None  # kg or lb
    rest_seconds: int = 90
    notes: str | None = None
    is_completed: bool = False  # Session scoped, never stored on the template
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "rest_seconds": self.rest_seconds,
            "notes": self.notes,
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            sets=int(data["sets"]),
            reps=int(data["reps"]),
            weight=data.get("weight"),
            rest_seconds=int(data.get("rest_seconds", 90)),
            notes=data.get("notes"),
            is_completed=bool(data.get("is_completed", False)),
        )

    def for_template(self) -> "Exercise":
        """Copy with the session-scoped completion flag cleared."""
        return replace(self, is_completed=False)

    @property
    def estimated_seconds(self) -> int:
        """Time under tension plus rest for this exercise."""
        return self.sets * self.reps * SECONDS_PER_REP + self.rest_seconds


def estimate_duration(exercises: list[Exercise]) -> int:
    """Estimate a day's duration in whole minutes."""
    return sum(ex.estimated_seconds for ex in exercises) // 60


@dataclass
class WorkoutDay:
    """A single day-slot (1-7) of the weekly template.

    The same day repeats in every week of the program, so edits here
    apply to all future occurrences.
    """

    template_id: str
    day_number: int
    workout_type: str
    exercises: list[Exercise] = field(default_factory=list)
    is_rest_day: bool = False
    estimated_duration: int = 0  # Minutes
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not 1 <= self.day_number <= MAX_TEMPLATE_DAYS:
            raise ValueError(f"Day number must be 1-{MAX_TEMPLATE_DAYS}, got {self.day_number}")
        if self.is_rest_day:
            self.exercises = []
            self.estimated_duration = 0

    @classmethod
    def build(
        cls,
        template_id: str,
        day_number: int,
        workout_type: str,
        exercises: list[Exercise],
    ) -> "WorkoutDay":
        """Create a day, treating "Rest" or an empty exercise list as a rest day."""
        is_rest_day = workout_type.strip().lower() == REST_DAY_LABEL.lower() or not exercises
        return cls(
            template_id=template_id,
            day_number=day_number,
            workout_type=workout_type,
            exercises=[] if is_rest_day else [ex.for_template() for ex in exercises],
            is_rest_day=is_rest_day,
            estimated_duration=0 if is_rest_day else estimate_duration(exercises),
        )

    def with_exercises(self, exercises: list[Exercise]) -> "WorkoutDay":
        """Copy with a new exercise list and a recomputed duration."""
        exercises = [ex.for_template() for ex in exercises]
        return replace(
            self,
            exercises=exercises,
            is_rest_day=False,
            estimated_duration=estimate_duration(exercises),
        )

    @property
    def display_name(self) -> str:
        return REST_DAY_LABEL if self.is_rest_day else self.workout_type

    def exercises_to_dicts(self) -> list[dict]:
        """Serialize exercises for storage (completion flags cleared)."""
        return [ex.for_template().to_dict() for ex in self.exercises]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "template_id": self.template_id,
            "day_number": self.day_number,
            "workout_type": self.workout_type,
            "exercises": self.exercises_to_dicts(),
            "is_rest_day": self.is_rest_day,
            "estimated_duration": self.estimated_duration,
        }


@dataclass
class WorkoutTemplate:
    """The recurring weekly pattern owned by a program."""

    program_id: str
    name: str
    days_per_week: int
    description: str = ""
    id: str = field(default_factory=new_id)
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "program_id": self.program_id,
            "name": self.name,
            "days_per_week": self.days_per_week,
            "description": self.description,
        }
