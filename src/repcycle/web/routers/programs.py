"""Program, week and template routes."""

from datetime import date

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from ...models.template import Exercise
from ...services import ProgramCatalog, ProgramEditor, ProgressRecorder
from .deps import get_catalog, get_editor, get_recorder, get_user_id

router = APIRouter(prefix="/programs", tags=["programs"])


class ExerciseIn(BaseModel):
    """Exercise payload."""

    name: str = Field(min_length=1)
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    weight: float | None = None
    rest_seconds: int = Field(default=90, ge=0)
    notes: str | None = None

    def to_exercise(self) -> Exercise:
        return Exercise(**self.model_dump())


class DayIn(BaseModel):
    """One day-slot of a weekly template."""

    workout_type: str
    exercises: list[ExerciseIn] = Field(default_factory=list)


class ProgramIn(BaseModel):
    """Program definition used for create and full update."""

    title: str = Field(min_length=1)
    description: str = ""
    icon: str = "💪"
    duration_weeks: int = Field(ge=1)
    days_per_week: int = Field(ge=1, le=7)
    days: list[DayIn] = Field(min_length=1, max_length=7)
    start_date: date | None = None  # Create only

    def weekly_workouts(self) -> list[tuple[str, list[Exercise]]]:
        return [(d.workout_type, [ex.to_exercise() for ex in d.exercises]) for d in self.days]


class RenameIn(BaseModel):
    title: str = Field(min_length=1)


class DayUpdateIn(BaseModel):
    """Partial day edit: label and/or rest status."""

    workout_type: str | None = None
    is_rest_day: bool | None = None


class CompleteIn(BaseModel):
    duration_seconds: int = Field(default=0, ge=0)
    notes: str | None = None


@router.get("")
async def list_programs(
    catalog: ProgramCatalog = Depends(get_catalog),
    user_id: int = Depends(get_user_id),
):
    """List the user's programs."""
    return [p.to_dict() for p in await catalog.list_programs(user_id)]


@router.post("", status_code=201)
async def create_program(
    body: ProgramIn,
    catalog: ProgramCatalog = Depends(get_catalog),
    user_id: int = Depends(get_user_id),
):
    """Create a program from a weekly template."""
    program_id = await catalog.create_program(
        user_id=user_id,
        title=body.title,
        description=body.description,
        icon=body.icon,
        duration_weeks=body.duration_weeks,
        days_per_week=body.days_per_week,
        weekly_workouts=body.weekly_workouts(),
        start_date=body.start_date,
    )
    return (await catalog.get_program(program_id)).to_dict()


@router.get("/{program_id}")
async def get_program(program_id: str, catalog: ProgramCatalog = Depends(get_catalog)):
    """Program header data."""
    return (await catalog.get_program(program_id)).to_dict()


@router.put("/{program_id}")
async def update_program(
    program_id: str,
    body: ProgramIn,
    catalog: ProgramCatalog = Depends(get_catalog),
):
    """Replace a program's template and duration."""
    await catalog.update_program(
        program_id,
        title=body.title,
        description=body.description,
        duration_weeks=body.duration_weeks,
        days_per_week=body.days_per_week,
        weekly_workouts=body.weekly_workouts(),
    )
    return (await catalog.get_program(program_id)).to_dict()


@router.patch("/{program_id}")
async def rename_program(
    program_id: str,
    body: RenameIn,
    editor: ProgramEditor = Depends(get_editor),
    catalog: ProgramCatalog = Depends(get_catalog),
):
    """Rename a program."""
    await editor.rename_program(program_id, body.title)
    return (await catalog.get_program(program_id)).to_dict()


@router.delete("/{program_id}", status_code=204)
async def delete_program(program_id: str, catalog: ProgramCatalog = Depends(get_catalog)):
    """Delete a program with its history and rest-day logs."""
    await catalog.delete_program(program_id)


@router.get("/{program_id}/weeks/{week}")
async def get_week(
    program_id: str,
    week: int = Path(ge=1),
    catalog: ProgramCatalog = Depends(get_catalog),
):
    """All sessions of a week. Weeks past the program's end are allowed."""
    return [s.to_dict() for s in await catalog.get_week_workouts(program_id, week)]


@router.get("/{program_id}/sessions/{week}/{day}")
async def get_session(
    program_id: str,
    week: int = Path(ge=1),
    day: int = Path(ge=1, le=7),
    catalog: ProgramCatalog = Depends(get_catalog),
):
    """A single session."""
    return (await catalog.get_session(program_id, week, day)).to_dict()


@router.post("/{program_id}/sessions/{week}/{day}/complete", status_code=201)
async def complete_session(
    program_id: str,
    body: CompleteIn,
    week: int = Path(ge=1),
    day: int = Path(ge=1, le=7),
    recorder: ProgressRecorder = Depends(get_recorder),
):
    """Complete a session, log it to history and advance the cursor."""
    history_id = await recorder.complete_session(
        program_id, week, day, body.duration_seconds, body.notes
    )
    state = await recorder.get_completion_state(program_id)
    return {"history_id": history_id, **state.to_dict()}


@router.post("/{program_id}/days/{day}/exercises", status_code=201)
async def add_exercise(
    program_id: str,
    body: ExerciseIn,
    day: int = Path(ge=1, le=7),
    editor: ProgramEditor = Depends(get_editor),
):
    """Append an exercise to a template day."""
    return (await editor.add_exercise(program_id, day, body.to_exercise())).to_dict()


@router.put("/{program_id}/days/{day}/exercises/{index}")
async def update_exercise(
    program_id: str,
    index: int,
    body: ExerciseIn,
    day: int = Path(ge=1, le=7),
    editor: ProgramEditor = Depends(get_editor),
):
    """Replace the exercise at index."""
    return (await editor.update_exercise(program_id, day, index, body.to_exercise())).to_dict()


@router.delete("/{program_id}/days/{day}/exercises/{index}")
async def delete_exercise(
    program_id: str,
    index: int,
    day: int = Path(ge=1, le=7),
    editor: ProgramEditor = Depends(get_editor),
):
    """Remove the exercise at index."""
    return (await editor.delete_exercise(program_id, day, index)).to_dict()


@router.patch("/{program_id}/days/{day}")
async def update_day(
    program_id: str,
    body: DayUpdateIn,
    day: int = Path(ge=1, le=7),
    editor: ProgramEditor = Depends(get_editor),
):
    """Rename a day and/or swap it between workout and rest."""
    updated = None
    if body.is_rest_day is not None:
        updated = await editor.set_rest_day(program_id, day, body.is_rest_day)
    if body.workout_type:
        updated = await editor.rename_day(program_id, day, body.workout_type)
    if updated is None:
        updated = await editor.get_day(program_id, day)
    return updated.to_dict()
