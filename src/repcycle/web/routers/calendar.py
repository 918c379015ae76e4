"""Calendar routes across all of a user's programs."""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query

from ...services import ProgramCatalog
from .deps import get_catalog, get_user_id

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("")
async def scheduled_workouts(
    start: date | None = None,
    end: date | None = None,
    catalog: ProgramCatalog = Depends(get_catalog),
    user_id: int = Depends(get_user_id),
):
    """Sessions keyed by ISO date. Defaults to the next 7 days."""
    start = start or date.today()
    end = end or start + timedelta(days=6)
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    scheduled = await catalog.get_scheduled_workouts(user_id, start, end)
    return {
        when.isoformat(): [w.to_dict() for w in workouts]
        for when, workouts in scheduled.items()
    }


@router.get("/today")
async def today(
    catalog: ProgramCatalog = Depends(get_catalog),
    user_id: int = Depends(get_user_id),
):
    return [w.to_dict() for w in await catalog.get_todays_workouts(user_id)]


@router.get("/upcoming")
async def upcoming(
    limit: int = Query(default=5, ge=1, le=50),
    catalog: ProgramCatalog = Depends(get_catalog),
    user_id: int = Depends(get_user_id),
):
    return [w.to_dict() for w in await catalog.get_upcoming_workouts(user_id, limit=limit)]
