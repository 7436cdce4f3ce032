"""
Routines router for training splits.

This router provides endpoints for:
- Listing predefined and custom routines
- Custom routine CRUD
- Selecting a routine and reading today's workout day
- Per-routine tracked exercises
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from pydantic import BaseModel, Field

from api.deps import get_catalog, get_routine_store
from api.routers.exercises import validate_exercise_id
from application.ports import ExerciseCatalog
from backend.core.routines import (
    RoutineNotFoundError,
    RoutineStore,
    RoutineValidationError,
)
from domain.models import WorkoutDay, WorkoutRoutine

router = APIRouter(
    prefix="/routines",
    tags=["Routines"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class RoutineCreateRequest(BaseModel):
    name: str
    description: str = ""
    days_per_week: int
    days: List[WorkoutDay]


class RoutineUpdateRequest(BaseModel):
    """Partial update; only fields that are sent are changed."""
    name: Optional[str] = None
    description: Optional[str] = None
    days_per_week: Optional[int] = None
    days: Optional[List[WorkoutDay]] = None


class SelectRoutineRequest(BaseModel):
    routine_id: str = Field(..., min_length=1)


class SelectedRoutineResponse(BaseModel):
    routine: Optional[WorkoutRoutine] = None
    todays_workout: Optional[WorkoutDay] = None
    exercises: List[str] = []


class RoutineExercisesRequest(BaseModel):
    exercises: List[str]


def _raise_validation(error: RoutineValidationError) -> None:
    raise HTTPException(
        status_code=400,
        detail={"message": error.message, "errors": error.errors},
    )


def _require_routine(store: RoutineStore, routine_id: str) -> WorkoutRoutine:
    routine = store.get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail=f"Routine not found: {routine_id}")
    return routine


def _require_exercise(catalog: ExerciseCatalog, exercise_id: str) -> None:
    validate_exercise_id(exercise_id)
    if catalog.get_by_id(exercise_id) is None:
        raise HTTPException(status_code=404, detail=f"Exercise not found: {exercise_id}")


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[WorkoutRoutine])
def list_routines(
    store: RoutineStore = Depends(get_routine_store),
) -> List[WorkoutRoutine]:
    """Predefined routines followed by custom ones."""
    return store.get_all_routines()


@router.post("", response_model=WorkoutRoutine, status_code=status.HTTP_201_CREATED)
def create_routine(
    request: RoutineCreateRequest,
    store: RoutineStore = Depends(get_routine_store),
) -> WorkoutRoutine:
    try:
        return store.add_custom_routine(request.model_dump())
    except RoutineValidationError as e:
        _raise_validation(e)


@router.get("/selected", response_model=SelectedRoutineResponse)
def get_selected_routine(
    store: RoutineStore = Depends(get_routine_store),
) -> SelectedRoutineResponse:
    """The routine being followed, today's day of it and its tracked exercises."""
    return SelectedRoutineResponse(
        routine=store.get_selected_routine(),
        todays_workout=store.get_todays_workout(),
        exercises=store.get_selected_exercises(),
    )


@router.put("/selected", response_model=SelectedRoutineResponse)
def select_routine(
    request: SelectRoutineRequest,
    store: RoutineStore = Depends(get_routine_store),
) -> SelectedRoutineResponse:
    try:
        routine = store.select_routine(request.routine_id)
    except RoutineNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return SelectedRoutineResponse(
        routine=routine,
        todays_workout=store.get_todays_workout(),
        exercises=store.get_selected_exercises(),
    )


@router.delete("/selected", status_code=status.HTTP_204_NO_CONTENT)
def clear_selected_routine(
    store: RoutineStore = Depends(get_routine_store),
) -> Response:
    store.clear_selected_routine()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{routine_id}", response_model=WorkoutRoutine)
def get_routine(
    routine_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
) -> WorkoutRoutine:
    return _require_routine(store, routine_id)


@router.patch("/{routine_id}", response_model=WorkoutRoutine)
def update_routine(
    request: RoutineUpdateRequest,
    routine_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
) -> WorkoutRoutine:
    """Edit a custom routine. Predefined routines answer 404."""
    try:
        updated = store.update_custom_routine(
            routine_id, request.model_dump(exclude_unset=True)
        )
    except RoutineValidationError as e:
        _raise_validation(e)

    if updated is None:
        raise HTTPException(status_code=404, detail=f"Custom routine not found: {routine_id}")
    return updated


@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routine(
    routine_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
) -> Response:
    if not store.delete_custom_routine(routine_id):
        raise HTTPException(status_code=404, detail=f"Custom routine not found: {routine_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{routine_id}/exercises", response_model=List[str])
def get_routine_exercises(
    routine_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
) -> List[str]:
    _require_routine(store, routine_id)
    return store.get_routine_exercises(routine_id)


@router.put("/{routine_id}/exercises", response_model=List[str])
def set_routine_exercises(
    request: RoutineExercisesRequest,
    routine_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
    catalog: ExerciseCatalog = Depends(get_catalog),
) -> List[str]:
    _require_routine(store, routine_id)
    for exercise_id in request.exercises:
        _require_exercise(catalog, exercise_id)

    store.set_routine_exercises(routine_id, request.exercises)
    return store.get_routine_exercises(routine_id)


@router.post("/{routine_id}/exercises/{exercise_id}/toggle", response_model=List[str])
def toggle_routine_exercise(
    routine_id: str = Path(...),
    exercise_id: str = Path(...),
    store: RoutineStore = Depends(get_routine_store),
    catalog: ExerciseCatalog = Depends(get_catalog),
) -> List[str]:
    """Track the exercise if untracked, else stop tracking it."""
    _require_routine(store, routine_id)
    _require_exercise(catalog, exercise_id)
    return store.toggle_routine_exercise(routine_id, exercise_id)
