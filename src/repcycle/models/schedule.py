"""Program schedule model and completion tracking."""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Iterator, NamedTuple

from .template import new_id

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[1-9][0-9]*-[1-9][0-9]*$")


class ScheduleStatus(str, Enum):
    """Lifecycle status of a program schedule."""

    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, value: str | None) -> "ScheduleStatus":
        """Parse a stored status, defaulting to NOT_STARTED for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return cls.NOT_STARTED

    @property
    def display(self) -> str:
        """Human-readable status, e.g. "In Progress"."""
        return self.value.replace("_", " ").title()


class Cursor(NamedTuple):
    """Pointer to the next session to perform."""

    week: int
    day: int


def day_key(week: int, day: int) -> str:
    """Format the completed-day key for a session."""
    return f"{int(week)}-{int(day)}"


@dataclass(frozen=True)
class CompletedDays:
    """Set of completed sessions, keyed as "{week}-{day}".

    JSON (a list of key strings) is only used at the storage edge.
    """

    keys: frozenset[str] = frozenset()

    @classmethod
    def of(cls, sessions: Iterable[tuple[int, int]]) -> "CompletedDays":
        return cls(frozenset(day_key(week, day) for week, day in sessions))

    def contains(self, week: int, day: int) -> bool:
        return day_key(week, day) in self.keys

    def with_day(self, week: int, day: int) -> "CompletedDays":
        """Return a copy including the given session."""
        key = day_key(week, day)
        if key in self.keys:
            return self
        return CompletedDays(self.keys | {key})

    def sessions(self) -> list[tuple[int, int]]:
        """Completed (week, day) pairs in schedule order."""
        pairs = []
        for key in self.keys:
            week, day = key.split("-")
            pairs.append((int(week), int(day)))
        return sorted(pairs)

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.keys, key=lambda k: tuple(int(p) for p in k.split("-"))))

    def to_json(self) -> str:
        """Serialize for storage."""
        return json.dumps(list(self))

    @classmethod
    def from_json(cls, raw: str | None) -> "CompletedDays":
        """Parse stored JSON, ignoring malformed content."""
        if not raw:
            return cls()
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed completed-days value: %r", raw)
            return cls()
        if not isinstance(values, list):
            logger.warning("Discarding non-list completed-days value: %r", raw)
            return cls()
        keys = set()
        rejected = 0
        for value in values:
            if isinstance(value, str) and _KEY_PATTERN.match(value):
                keys.add(value)
            else:
                rejected += 1
        if rejected:
            logger.warning("Dropped %d malformed completed-day keys", rejected)
        return cls(frozenset(keys))


@dataclass
class ProgramSchedule:
    """A user's live instantiation of a template.

    Holds the start date, duration, resume cursor and completion
    progress for one program.
    """

    user_id: int
    program_id: str
    template_id: str
    title: str
    start_date: date
    duration_weeks: int
    description: str = ""
    icon: str = "💪"
    current_week: int = 1
    current_day: int = 1
    completed: CompletedDays = field(default_factory=CompletedDays)
    status: ScheduleStatus = ScheduleStatus.ACTIVE
    completion_percentage: float = 0.0
    id: str = field(default_factory=new_id)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def cursor(self) -> Cursor:
        return Cursor(self.current_week, self.current_day)

    def get_position_display(self) -> str:
        """Get a human-readable position string."""
        return f"Week {self.current_week}, Day {self.current_day}"

    def to_dict(self) -> dict:
        """Convert to dictionary for display or JSON output."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "program_id": self.program_id,
            "template_id": self.template_id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "start_date": self.start_date.isoformat(),
            "duration_weeks": self.duration_weeks,
            "current_week": self.current_week,
            "current_day": self.current_day,
            "completed_days": list(self.completed),
            "status": self.status.value,
            "completion_percentage": self.completion_percentage,
        }
