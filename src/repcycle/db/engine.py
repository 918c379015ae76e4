"""Database engine setup and initialization."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import DB_FILENAME, get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with row access by name and foreign keys enforced."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        # One recurring weekly template per program
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_templates (
                id TEXT PRIMARY KEY,
                program_id TEXT NOT NULL UNIQUE,
                name TEXT NOT NULL,
                days_per_week INTEGER NOT NULL,
                description TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Day-slots 1-7 of a template
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_days (
                id TEXT PRIMARY KEY,
                template_id TEXT NOT NULL,
                day_number INTEGER NOT NULL,
                workout_type TEXT NOT NULL,
                exercises TEXT NOT NULL DEFAULT '[]',
                is_rest_day INTEGER NOT NULL DEFAULT 0,
                estimated_duration INTEGER NOT NULL DEFAULT 0,
                UNIQUE (template_id, day_number),
                FOREIGN KEY (template_id) REFERENCES workout_templates(id) ON DELETE CASCADE
            )
        """)

        # Live schedule: start date, cursor and completion progress
        await db.execute("""
            CREATE TABLE IF NOT EXISTS program_schedules (
                id TEXT PRIMARY KEY,
                user_id INTEGER NOT NULL,
                program_id TEXT NOT NULL UNIQUE,
                template_id TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT DEFAULT '',
                icon TEXT DEFAULT '',
                start_date TEXT NOT NULL,
                duration_weeks INTEGER NOT NULL,
                current_week INTEGER NOT NULL DEFAULT 1,
                current_day INTEGER NOT NULL DEFAULT 1,
                completed_days TEXT NOT NULL DEFAULT '[]',
                status TEXT NOT NULL DEFAULT 'ACTIVE',
                completion_percentage REAL NOT NULL DEFAULT 0,
                created_at TIMESTAMP,
                updated_at TIMESTAMP
            )
        """)

        # Append-only log of completed sessions
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                program_id TEXT NOT NULL,
                session_id TEXT NOT NULL,
                session_name TEXT NOT NULL,
                completed_at TIMESTAMP NOT NULL,
                duration_minutes INTEGER NOT NULL DEFAULT 0,
                exercises TEXT NOT NULL DEFAULT '[]',
                notes TEXT
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS rest_day_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                program_id TEXT NOT NULL,
                week_number INTEGER NOT NULL,
                day_number INTEGER NOT NULL,
                feeling TEXT DEFAULT '',
                activities TEXT DEFAULT '[]',
                note TEXT DEFAULT '',
                logged_at TIMESTAMP NOT NULL
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_days_template
            ON workout_days(template_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_program_schedules_user
            ON program_schedules(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_history_session
            ON workout_history(program_id, session_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_rest_day_logs_day
            ON rest_day_logs(program_id, week_number, day_number)
        """)

        await db.commit()

    logger.debug("Initialized database at %s", db_path)
