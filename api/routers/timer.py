"""
Timer router for rest timer preferences.

This router provides endpoints for:
- Reading, updating and resetting timer settings
- Per-exercise last-used rest duration
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from pydantic import BaseModel, Field, ValidationError

from api.deps import get_timer_settings_store
from api.routers.exercises import validate_exercise_id
from backend.core.timer_settings import TimerSettingsStore, format_time
from domain.models import TimerSettings

router = APIRouter(
    prefix="/timer",
    tags=["Timer"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class TimerSettingsUpdate(BaseModel):
    """Partial settings update."""
    default_duration: Optional[int] = None
    sound_enabled: Optional[bool] = None
    vibration_enabled: Optional[bool] = None
    keep_awake_during_workout: Optional[bool] = None


class ExerciseDurationRequest(BaseModel):
    duration: int = Field(..., ge=0, le=3600, description="Rest duration in seconds")


class ExerciseDurationResponse(BaseModel):
    exercise_id: str
    duration: int
    display: str


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/settings", response_model=TimerSettings)
def get_timer_settings(
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> TimerSettings:
    return store.get_timer_settings()


@router.patch("/settings", response_model=TimerSettings)
def update_timer_settings(
    request: TimerSettingsUpdate,
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> TimerSettings:
    try:
        return store.save_timer_settings(request.model_dump(exclude_none=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=[err["msg"] for err in e.errors()],
        )


@router.delete("/settings", response_model=TimerSettings)
def reset_timer_settings(
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> TimerSettings:
    """Back to defaults."""
    return store.reset_timer_settings()


@router.get("/exercises/{exercise_id}", response_model=ExerciseDurationResponse)
def get_exercise_duration(
    exercise_id: str = Path(...),
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> ExerciseDurationResponse:
    """Last rest duration used for the exercise, else the default."""
    validate_exercise_id(exercise_id)
    duration = store.get_exercise_timer_duration(exercise_id)
    return ExerciseDurationResponse(
        exercise_id=exercise_id,
        duration=duration,
        display=format_time(duration),
    )


@router.put("/exercises/{exercise_id}", response_model=ExerciseDurationResponse)
def save_exercise_duration(
    request: ExerciseDurationRequest,
    exercise_id: str = Path(...),
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> ExerciseDurationResponse:
    validate_exercise_id(exercise_id)
    store.save_exercise_timer_duration(exercise_id, request.duration)
    return ExerciseDurationResponse(
        exercise_id=exercise_id,
        duration=request.duration,
        display=format_time(request.duration),
    )


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
def reset_timer_history(
    store: TimerSettingsStore = Depends(get_timer_settings_store),
) -> Response:
    store.reset_timer_history()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
