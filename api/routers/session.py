"""
Session router for the single active workout session.

This router provides endpoints for:
- Reading, starting and timing the active session
- The end-of-workout summary and dismissing it
- Recovering a stale, unfinished session's summary once
- The exercise currently open on the logging screen
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from pydantic import BaseModel, ConfigDict

from api.deps import (
    get_catalog,
    get_end_session_use_case,
    get_in_progress_tracker,
    get_session_manager,
)
from api.routers.exercises import validate_exercise_id
from application.ports import ExerciseCatalog
from application.use_cases import EndSessionUseCase, SessionSummary
from backend.core.in_progress import InProgressExerciseTracker
from backend.core.session_manager import ActiveSessionManager
from domain.models import ActiveSession, LevelUp, PRAchievement

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/session",
    tags=["Session"],
)


# =============================================================================
# Response Models
# =============================================================================


class SessionStatusResponse(BaseModel):
    """Timing of the active session."""
    active: bool
    duration_minutes: int = 0
    minutes_since_last_activity: int = 0
    is_inactive: bool = False


class ExerciseSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exercise_id: str
    name: str
    sets: int
    working_sets: int
    max_weight: float


class SessionSummaryResponse(BaseModel):
    """End-of-workout summary."""
    model_config = ConfigDict(from_attributes=True)

    duration_text: str
    duration_minutes: int
    exercise_count: int
    total_sets: int
    working_sets: int
    total_volume: float
    exercises: List[ExerciseSummaryResponse]
    prs: List[PRAchievement]
    level_ups: List[LevelUp]


class InProgressResponse(BaseModel):
    exercise_id: Optional[str] = None


def _to_response(summary: Optional[SessionSummary]) -> Optional[SessionSummaryResponse]:
    if summary is None:
        return None
    return SessionSummaryResponse.model_validate(summary, from_attributes=True)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=Optional[ActiveSession])
def get_session(
    manager: ActiveSessionManager = Depends(get_session_manager),
) -> Optional[ActiveSession]:
    """The active session, or null if there is none (or it went stale)."""
    return manager.get_session()


@router.post("/start", response_model=ActiveSession)
def start_session(
    manager: ActiveSessionManager = Depends(get_session_manager),
) -> ActiveSession:
    """Start a session; returns the current one if already active."""
    return manager.start()


@router.get("/status", response_model=SessionStatusResponse)
def get_status(
    manager: ActiveSessionManager = Depends(get_session_manager),
) -> SessionStatusResponse:
    if not manager.has_active_session():
        return SessionStatusResponse(active=False)

    return SessionStatusResponse(
        active=True,
        duration_minutes=int(manager.duration().total_seconds() // 60),
        minutes_since_last_activity=manager.minutes_since_last_activity(),
        is_inactive=manager.is_inactive(),
    )


@router.get("/summary", response_model=SessionSummaryResponse)
def get_summary(
    use_case: EndSessionUseCase = Depends(get_end_session_use_case),
) -> SessionSummaryResponse:
    """Summary of the active session without ending it."""
    summary = use_case.summary()
    if summary is None:
        raise HTTPException(status_code=404, detail="No active session")
    return _to_response(summary)


@router.post("/end", response_model=Optional[SessionSummaryResponse])
def end_session(
    use_case: EndSessionUseCase = Depends(get_end_session_use_case),
) -> Optional[SessionSummaryResponse]:
    """
    End the session and return its summary.

    Returns null when there was nothing logged; the session is cleared
    either way.
    """
    summary = use_case.summary()
    use_case.dismiss()
    return _to_response(summary)


@router.post("/recover", response_model=Optional[SessionSummaryResponse])
def recover_stale_session(
    use_case: EndSessionUseCase = Depends(get_end_session_use_case),
) -> Optional[SessionSummaryResponse]:
    """
    Summary of an unfinished session that went stale (e.g. yesterday's).

    Returned once; the stale session is cleared.
    """
    return _to_response(use_case.recover_stale())


@router.get("/in-progress", response_model=InProgressResponse)
def get_in_progress_exercise(
    tracker: InProgressExerciseTracker = Depends(get_in_progress_tracker),
) -> InProgressResponse:
    """Exercise open on the logging screen today, if any."""
    return InProgressResponse(exercise_id=tracker.get())


@router.put("/in-progress/{exercise_id}", response_model=InProgressResponse)
def set_in_progress_exercise(
    exercise_id: str = Path(...),
    tracker: InProgressExerciseTracker = Depends(get_in_progress_tracker),
    catalog: ExerciseCatalog = Depends(get_catalog),
) -> InProgressResponse:
    validate_exercise_id(exercise_id)
    if catalog.get_by_id(exercise_id) is None:
        raise HTTPException(status_code=404, detail=f"Exercise not found: {exercise_id}")

    tracker.set(exercise_id)
    return InProgressResponse(exercise_id=exercise_id)


@router.delete("/in-progress", status_code=status.HTTP_204_NO_CONTENT)
def clear_in_progress_exercise(
    tracker: InProgressExerciseTracker = Depends(get_in_progress_tracker),
) -> Response:
    tracker.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
