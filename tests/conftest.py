"""Pytest configuration and fixtures."""

import tempfile
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

from repcycle.config import get_settings
from repcycle.db import init_db
from repcycle.models.template import Exercise
from repcycle.services import ProgramCatalog


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read REPCYCLE_* settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest_asyncio.fixture
async def db_path(temp_db_path):
    """A temporary database with the schema created."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def start_date():
    return date(2024, 1, 1)


@pytest.fixture
def push_exercises():
    return [
        Exercise(name="Bench Press", sets=3, reps=8, weight=60, rest_seconds=90),
        Exercise(name="Overhead Press", sets=3, reps=10, rest_seconds=60),
    ]


@pytest.fixture
def pull_exercises():
    return [Exercise(name="Barbell Row", sets=4, reps=8, weight=50, rest_seconds=120)]


@pytest.fixture
def three_day_week(push_exercises, pull_exercises):
    """Push, rest, pull."""
    return [
        ("Push", push_exercises),
        ("Rest", []),
        ("Pull", pull_exercises),
    ]


@pytest_asyncio.fixture
async def program_id(db_path, three_day_week, start_date):
    """A two-week push/rest/pull program starting 2024-01-01."""
    catalog = ProgramCatalog(db_path)
    return await catalog.create_program(
        user_id=1,
        title="Push Pull",
        description="Two weeks of push and pull",
        icon="💪",
        duration_weeks=2,
        days_per_week=3,
        weekly_workouts=three_day_week,
        start_date=start_date,
    )
