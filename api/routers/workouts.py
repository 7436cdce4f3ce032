"""
Workouts router for set logging, history and progression.

This router provides endpoints for:
- Logging a set (history + active session + PR/level events)
- Exercise history windows, today's record and PRs
- Level classification and demotion checks
- Daily summaries and volume history
"""
import logging
import re
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_daily_summary_service,
    get_history_store,
    get_log_set_use_case,
    get_profile_service,
    get_progression_service,
)
from api.routers.exercises import validate_exercise_id
from application.use_cases import LogSetUseCase
from backend.core.daily_summary import (
    DailySummary,
    DailySummaryService,
    DailyVolumePoint,
)
from backend.core.profile_service import ProfileService
from backend.core.progression_service import ProgressionService
from backend.core.workout_history import WorkoutHistoryStore
from domain.models import (
    ActiveSession,
    Level,
    Profile,
    WeightUnit,
    WorkoutRecord,
    WorkoutSet,
)
from domain.models.load import convert_to_kg

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_valid_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


# =============================================================================
# Request / Response Models
# =============================================================================


class SetInput(BaseModel):
    """One set as entered; either field may still be blank."""
    weight: Optional[float] = Field(None, ge=0, le=1000)
    reps: Optional[int] = Field(None, ge=0, le=1000)


class LogSetRequest(BaseModel):
    """Today's full set list for an exercise, with the one just logged."""
    profile_id: str = Field(..., min_length=1)
    exercise_id: str = Field(..., min_length=1)
    sets: List[SetInput] = Field(..., min_length=1)
    set_index: int = Field(..., ge=0)
    is_warmup: Optional[bool] = None
    completed_sets: Optional[List[int]] = None
    unit: WeightUnit = Field(default="kg", description="Unit the weights were entered in")


class LogSetResponse(BaseModel):
    record: WorkoutRecord
    session: Optional[ActiveSession] = None
    is_pr: bool = False
    pr_message: Optional[str] = None
    level_up: Optional[Level] = None
    level_up_message: Optional[str] = None


class PersonalRecordResponse(BaseModel):
    exercise_id: str
    max_weight: float


class LevelResponse(BaseModel):
    exercise_id: str
    weight: float
    level: Level
    current_level: Optional[Level] = None


class DowngradeResponse(BaseModel):
    exercise_id: str
    downgraded: bool
    previous_level: Optional[Level] = None
    new_level: Optional[Level] = None
    message: Optional[str] = None


def _require_profile(service: ProfileService, profile_id: str) -> Profile:
    profile = service.get_profile(profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Profile not found: {profile_id}")
    return profile


# =============================================================================
# Logging
# =============================================================================


@router.post("/log-set", response_model=LogSetResponse)
def log_set(
    request: LogSetRequest,
    use_case: LogSetUseCase = Depends(get_log_set_use_case),
) -> LogSetResponse:
    """
    Log one set.

    Weights entered in lbs are converted to kg before anything is stored.
    """
    validate_exercise_id(request.exercise_id)
    sets = [
        WorkoutSet(
            weight=convert_to_kg(s.weight, request.unit) if s.weight is not None else None,
            reps=s.reps,
        )
        for s in request.sets
    ]

    result = use_case.execute(
        profile_id=request.profile_id,
        exercise_id=request.exercise_id,
        sets=sets,
        set_index=request.set_index,
        is_warmup=request.is_warmup,
        completed_sets=request.completed_sets,
    )

    if not result.success:
        status_code = 404 if result.error_type == "not_found" else 400
        raise HTTPException(status_code=status_code, detail=result.error)

    return LogSetResponse(
        record=result.record,
        session=result.session,
        is_pr=result.is_pr,
        pr_message=result.pr_message,
        level_up=result.level_up,
        level_up_message=result.level_up_message,
    )


# =============================================================================
# History
# =============================================================================


@router.get("/{profile_id}/exercises", response_model=List[str])
def get_exercises_with_history(
    profile_id: str = Path(...),
    history: WorkoutHistoryStore = Depends(get_history_store),
) -> List[str]:
    """Exercise ids the profile has logged weight for."""
    return sorted(history.get_exercises_with_history(profile_id))


@router.get(
    "/{profile_id}/exercises/{exercise_id}/sessions",
    response_model=List[WorkoutRecord],
)
def get_exercise_sessions(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    limit: int = Query(3, ge=1, le=100, description="Most recent sessions to return"),
    history: WorkoutHistoryStore = Depends(get_history_store),
) -> List[WorkoutRecord]:
    """Most recent records for an exercise, newest first."""
    validate_exercise_id(exercise_id)
    return history.get_exercise_sessions(profile_id, exercise_id, limit)


@router.get(
    "/{profile_id}/exercises/{exercise_id}/today",
    response_model=Optional[WorkoutRecord],
)
def get_today_session(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    history: WorkoutHistoryStore = Depends(get_history_store),
) -> Optional[WorkoutRecord]:
    validate_exercise_id(exercise_id)
    return history.get_today_session(profile_id, exercise_id)


@router.get(
    "/{profile_id}/exercises/{exercise_id}/pr",
    response_model=PersonalRecordResponse,
)
def get_exercise_pr(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    service: ProgressionService = Depends(get_progression_service),
) -> PersonalRecordResponse:
    validate_exercise_id(exercise_id)
    return PersonalRecordResponse(
        exercise_id=exercise_id,
        max_weight=service.get_exercise_pr(profile_id, exercise_id),
    )


@router.get("/{profile_id}/dates", response_model=List[str])
def get_workout_dates(
    profile_id: str = Path(...),
    history: WorkoutHistoryStore = Depends(get_history_store),
) -> List[str]:
    return history.get_workout_dates(profile_id)


# =============================================================================
# Progression
# =============================================================================


@router.get(
    "/{profile_id}/exercises/{exercise_id}/level",
    response_model=LevelResponse,
)
def get_level_for_weight(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    weight: float = Query(..., ge=0, le=1000, description="Lifted weight in kg"),
    profiles: ProfileService = Depends(get_profile_service),
    service: ProgressionService = Depends(get_progression_service),
) -> LevelResponse:
    """Classify a weight against the profile's bodyweight thresholds."""
    validate_exercise_id(exercise_id)
    profile = _require_profile(profiles, profile_id)
    if service.get_level_thresholds(exercise_id, profile.weight, profile.sex) is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")

    return LevelResponse(
        exercise_id=exercise_id,
        weight=weight,
        level=service.get_level_for_weight(exercise_id, profile.weight, weight, profile.sex),
        current_level=profile.rating_for(exercise_id),
    )


@router.post(
    "/{profile_id}/exercises/{exercise_id}/downgrade-check",
    response_model=DowngradeResponse,
)
def check_downgrade(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    profiles: ProfileService = Depends(get_profile_service),
    use_case: LogSetUseCase = Depends(get_log_set_use_case),
) -> DowngradeResponse:
    """
    Demote the profile's rating if its recent sessions fell short.

    Applies and returns the new level when a demotion happens.
    """
    validate_exercise_id(exercise_id)
    _require_profile(profiles, profile_id)

    result = use_case.evaluate_downgrade(profile_id, exercise_id)
    if result is None:
        return DowngradeResponse(exercise_id=exercise_id, downgraded=False)

    return DowngradeResponse(
        exercise_id=exercise_id,
        downgraded=True,
        previous_level=result.previous_level,
        new_level=result.new_level,
        message=result.message,
    )


# =============================================================================
# Daily summaries
# =============================================================================


@router.get("/{profile_id}/daily/{date}", response_model=DailySummary)
def get_daily_summary(
    profile_id: str = Path(...),
    date: str = Path(..., description="Local date, YYYY-MM-DD"),
    service: DailySummaryService = Depends(get_daily_summary_service),
) -> DailySummary:
    if not _is_valid_date(date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD.")

    summary = service.get_daily_summary(profile_id, date)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No workouts on {date}")
    return summary


@router.get("/{profile_id}/volume-history", response_model=List[DailyVolumePoint])
def get_volume_history(
    profile_id: str = Path(...),
    max_days: int = Query(14, ge=1, le=365),
    service: DailySummaryService = Depends(get_daily_summary_service),
) -> List[DailyVolumePoint]:
    """Total volume per training day, oldest first."""
    return service.get_daily_volume_history(profile_id, max_days)
