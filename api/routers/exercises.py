"""
Exercises router for the static exercise catalog.

This router provides endpoints for:
- Listing catalog exercises, optionally by body part
- Strength thresholds for a bodyweight
- Warm-up suggestions for a working weight
"""
import re
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel

from api.deps import get_catalog, get_progression_service
from application.ports import ExerciseCatalog
from backend.core.progression_service import ProgressionService
from backend.core.warmup import calculate_warmup_sets, format_warmup_plan
from domain.models import BodyPart, Exercise, Level, Sex

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


# Valid exercise ID pattern: lowercase letters, numbers, and hyphens
EXERCISE_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*[a-z0-9]$|^[a-z0-9]$")


def validate_exercise_id(exercise_id: str) -> None:
    """Validate exercise ID format."""
    if not EXERCISE_ID_PATTERN.match(exercise_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid exercise_id format. Use lowercase letters, numbers, and hyphens only."
        )


# =============================================================================
# Response Models
# =============================================================================


class ThresholdsResponse(BaseModel):
    """Weight needed for each level at a bodyweight."""
    exercise_id: str
    bodyweight: float
    sex: Optional[Sex] = None
    is_dumbbell: bool
    thresholds: Dict[Level, float]


class WarmupSetResponse(BaseModel):
    weight: float
    reps: int
    purpose: str


class WarmupResponse(BaseModel):
    target_weight: float
    sets: List[WarmupSetResponse]
    plan: Optional[str] = None


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[Exercise])
def list_exercises(
    body_part: Optional[BodyPart] = Query(None, description="Filter by body part"),
    catalog: ExerciseCatalog = Depends(get_catalog),
) -> List[Exercise]:
    """List catalog exercises."""
    if body_part is not None:
        return catalog.get_by_body_part(body_part)
    return catalog.get_all()


@router.get("/warmup", response_model=WarmupResponse)
def get_warmup(
    target_weight: float = Query(..., gt=0, le=1000, description="Working weight in kg"),
) -> WarmupResponse:
    """
    Suggested warm-up sets for a working weight.

    An empty list means no warm-up is worth doing at this weight.
    """
    sets = calculate_warmup_sets(target_weight) or []
    return WarmupResponse(
        target_weight=target_weight,
        sets=[WarmupSetResponse(weight=s.weight, reps=s.reps, purpose=s.purpose) for s in sets],
        plan=format_warmup_plan(sets) if sets else None,
    )


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str = Path(..., description="Catalog exercise ID"),
    catalog: ExerciseCatalog = Depends(get_catalog),
) -> Exercise:
    validate_exercise_id(exercise_id)
    exercise = catalog.get_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")
    return exercise


@router.get("/{exercise_id}/thresholds", response_model=ThresholdsResponse)
def get_thresholds(
    exercise_id: str = Path(..., description="Catalog exercise ID"),
    bodyweight: float = Query(..., gt=0, le=500, description="Bodyweight in kg"),
    sex: Optional[Sex] = Query(None),
    catalog: ExerciseCatalog = Depends(get_catalog),
    service: ProgressionService = Depends(get_progression_service),
) -> ThresholdsResponse:
    """
    Weight thresholds for every level.

    For dumbbell exercises the thresholds are per hand.
    """
    validate_exercise_id(exercise_id)
    thresholds = service.get_level_thresholds(exercise_id, bodyweight, sex)
    if thresholds is None:
        raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")

    return ThresholdsResponse(
        exercise_id=exercise_id,
        bodyweight=bodyweight,
        sex=sex,
        is_dumbbell=catalog.get_by_id(exercise_id).is_dumbbell,
        thresholds={level: round(value, 1) for level, value in thresholds.items()},
    )
