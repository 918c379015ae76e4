"""FastAPI application for the repcycle JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from ..exceptions import (
    IndexOutOfRangeError,
    InvalidScheduleError,
    RepcycleError,
    ScheduleNotFoundError,
    SessionNotFoundError,
    TemplateNotFoundError,
)
from .routers import calendar, programs, progress

logger = logging.getLogger(__name__)

ERROR_STATUS_MAP: dict[type[RepcycleError], int] = {
    ScheduleNotFoundError: 404,
    TemplateNotFoundError: 404,
    SessionNotFoundError: 404,
    IndexOutOfRangeError: 400,
    InvalidScheduleError: 400,
}


async def repcycle_error_handler(request: Request, exc: RepcycleError) -> JSONResponse:
    """Render a repcycle error as JSON with a matching status code."""
    status_code = ERROR_STATUS_MAP.get(type(exc), 400)
    if isinstance(exc, TemplateNotFoundError):
        logger.error("Store inconsistency on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - creates the schema on startup."""
        await init_db(db_path)
        yield

    app = FastAPI(
        title="repcycle",
        description="Recurring-template workout scheduler and progress engine",
        version=__version__,
        lifespan=lifespan,
    )

    # Repositories read the database path from app state
    app.state.db_path = db_path

    app.add_exception_handler(RepcycleError, repcycle_error_handler)

    app.include_router(programs.router)
    app.include_router(progress.router)
    app.include_router(calendar.router)

    @app.get("/")
    async def root():
        """Root redirect to the program list."""
        return RedirectResponse(url="/programs", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
