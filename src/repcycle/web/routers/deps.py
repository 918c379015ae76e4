"""Router dependencies."""

from fastapi import Request

from ...config import get_settings
from ...services import ProgramCatalog, ProgramEditor, ProgressRecorder


def get_catalog(request: Request) -> ProgramCatalog:
    return ProgramCatalog(request.app.state.db_path)


def get_editor(request: Request) -> ProgramEditor:
    return ProgramEditor(request.app.state.db_path)


def get_recorder(request: Request) -> ProgressRecorder:
    return ProgressRecorder(request.app.state.db_path)


def get_user_id() -> int:
    """Single-user deployments act as the configured default user."""
    return get_settings().default_user_id
