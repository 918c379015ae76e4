"""repcycle exceptions."""


class RepcycleError(Exception):
    """Base exception for repcycle errors."""
    pass


class ScheduleNotFoundError(RepcycleError):
    """Raised when no schedule exists for a program."""

    def __init__(self, program_id: str):
        super().__init__(f"Program not found: {program_id}")
        self.program_id = program_id


class TemplateNotFoundError(RepcycleError):
    """Raised when a schedule references a template that does not exist."""

    def __init__(self, template_id: str, program_id: str | None = None):
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id
        self.program_id = program_id


class SessionNotFoundError(RepcycleError):
    """Raised when a day number is not present in a program's template."""

    def __init__(self, program_id: str, week: int, day: int):
        super().__init__(
            f"Session not found: program={program_id}, week={week}, day={day}"
        )
        self.program_id = program_id
        self.week = week
        self.day = day


class IndexOutOfRangeError(RepcycleError, IndexError):
    """Raised when an exercise index is outside a day's exercise list."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Invalid exercise index: {index} (day has {size} exercises)")
        self.index = index
        self.size = size


class InvalidScheduleError(RepcycleError, ValueError):
    """Raised for malformed program input or an out-of-range position."""
    pass
