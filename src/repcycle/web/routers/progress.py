"""Progress, history and rest-day routes."""

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field

from ...services import ProgressRecorder
from .deps import get_recorder, get_user_id

router = APIRouter(prefix="/progress", tags=["progress"])


class PositionIn(BaseModel):
    week: int = Field(ge=1)
    day: int = Field(ge=1, le=7)


class RestDayIn(BaseModel):
    """How a rest day went."""

    week: int = Field(ge=1)
    day: int = Field(ge=1, le=7)
    feeling: str = ""
    activities: list[str] = Field(default_factory=list)
    note: str = ""
    mark_complete: bool = False


@router.get("/{program_id}")
async def get_progress(
    program_id: str,
    recorder: ProgressRecorder = Depends(get_recorder),
):
    """Completion state and aggregate stats."""
    state = await recorder.get_completion_state(program_id)
    stats = await recorder.get_progress_stats(program_id)
    return {**state.to_dict(), "stats": stats.to_dict()}


@router.get("/{program_id}/history")
async def get_history(
    program_id: str,
    recorder: ProgressRecorder = Depends(get_recorder),
):
    """Workout history, newest first."""
    return [e.to_dict() for e in await recorder.get_history_for_program(program_id)]


@router.get("/{program_id}/history/{history_id}")
async def get_history_entry(
    program_id: str,
    history_id: int,
    recorder: ProgressRecorder = Depends(get_recorder),
):
    entry = await recorder.get_history_entry(history_id)
    if entry is None or entry.program_id != program_id:
        raise HTTPException(status_code=404, detail=f"History entry {history_id} not found")
    return entry.to_dict()


@router.post("/{program_id}/position")
async def set_position(
    program_id: str,
    body: PositionIn,
    recorder: ProgressRecorder = Depends(get_recorder),
):
    """Move the resume cursor."""
    cursor = await recorder.set_position(program_id, body.week, body.day)
    return {"current_week": cursor.week, "current_day": cursor.day}


@router.post("/{program_id}/pause")
async def pause(program_id: str, recorder: ProgressRecorder = Depends(get_recorder)):
    return {"status": (await recorder.pause(program_id)).value}


@router.post("/{program_id}/resume")
async def resume(program_id: str, recorder: ProgressRecorder = Depends(get_recorder)):
    return {"status": (await recorder.resume(program_id)).value}


@router.post("/{program_id}/rest-days", status_code=201)
async def log_rest_day(
    program_id: str,
    body: RestDayIn,
    recorder: ProgressRecorder = Depends(get_recorder),
    user_id: int = Depends(get_user_id),
):
    """Log a rest day, optionally counting it as completed."""
    log_id = await recorder.log_rest_day(
        user_id,
        program_id,
        body.week,
        body.day,
        feeling=body.feeling,
        activities=body.activities,
        note=body.note,
        mark_complete=body.mark_complete,
    )
    return {"id": log_id}


@router.get("/{program_id}/rest-days/{week}/{day}")
async def get_rest_day(
    program_id: str,
    week: int = Path(ge=1),
    day: int = Path(ge=1, le=7),
    recorder: ProgressRecorder = Depends(get_recorder),
):
    log = await recorder.get_rest_day_log(program_id, week, day)
    if log is None:
        raise HTTPException(status_code=404, detail="No rest-day log for that day")
    return log.to_dict()
