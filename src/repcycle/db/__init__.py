"""Database layer for repcycle."""

from .engine import connect, get_db_path, init_db
from .repositories import (
    HistoryRepository,
    RestDayLogRepository,
    ScheduleRepository,
    TemplateRepository,
)

__all__ = [
    "connect",
    "get_db_path",
    "HistoryRepository",
    "init_db",
    "RestDayLogRepository",
    "ScheduleRepository",
    "TemplateRepository",
]
