"""
Profiles router for lifter profile management.

This router provides endpoints for:
- Profile CRUD (at most MAX_PROFILES per device)
- Per-exercise strength ratings
- Cloud sync (push pending changes, pull and merge)
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from pydantic import BaseModel, Field

from api.deps import get_profile_service, get_sync_cloud_use_case
from api.routers.exercises import validate_exercise_id
from application.use_cases import SyncCloudUseCase
from backend.core.profile_service import (
    ProfileLimitError,
    ProfileNotFoundError,
    ProfileService,
    ProfileValidationError,
)
from domain.models import Level, Profile, Sex

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class ProfileCreateRequest(BaseModel):
    """
    New profile fields.

    Ranges are checked by ProfileService so the client gets the same
    messages it shows in its form.
    """
    name: Optional[str] = None
    age: Optional[int] = None
    height: Optional[float] = Field(None, description="Height in cm")
    weight: Optional[float] = Field(None, description="Bodyweight in kg")
    sex: Optional[Sex] = None
    daily_steps: Optional[int] = None
    activity_level: Optional[str] = None
    goal: Optional[str] = None


class ProfileUpdateRequest(ProfileCreateRequest):
    """Partial update; only fields that are sent are changed."""


class RatingRequest(BaseModel):
    level: Level


class SyncResponse(BaseModel):
    pushed: bool
    pulled: bool
    pending: int
    workouts_added: int = 0


def _raise_for(error: Exception) -> None:
    if isinstance(error, ProfileValidationError):
        raise HTTPException(
            status_code=400,
            detail={"message": error.message, "errors": error.errors},
        )
    if isinstance(error, ProfileNotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ProfileLimitError):
        raise HTTPException(status_code=409, detail=str(error))
    raise error


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[Profile])
def list_profiles(
    service: ProfileService = Depends(get_profile_service),
) -> List[Profile]:
    return service.list_profiles()


@router.post("", response_model=Profile, status_code=status.HTTP_201_CREATED)
def create_profile(
    request: ProfileCreateRequest,
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Create a profile.

    Returns 400 with field messages for invalid input and 409 once the
    profile limit is reached.
    """
    try:
        return service.create_profile(request.model_dump(exclude_none=True))
    except (ProfileValidationError, ProfileLimitError) as e:
        _raise_for(e)


@router.post("/sync", response_model=SyncResponse)
def sync_profiles(
    use_case: SyncCloudUseCase = Depends(get_sync_cloud_use_case),
) -> SyncResponse:
    """
    Push pending local changes, then pull and merge the cloud snapshot.

    Profiles merge last-write-wins on updated_at; workout records missing
    locally are added.
    """
    result = use_case.execute()
    return SyncResponse(
        pushed=result.pushed,
        pulled=result.pulled,
        pending=result.pending,
        workouts_added=result.workouts_added,
    )


@router.get("/{profile_id}", response_model=Profile)
def get_profile(
    profile_id: str = Path(...),
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    profile = service.get_profile(profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Profile not found: {profile_id}")
    return profile


@router.patch("/{profile_id}", response_model=Profile)
def update_profile(
    request: ProfileUpdateRequest,
    profile_id: str = Path(...),
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    try:
        return service.update_profile(profile_id, request.model_dump(exclude_unset=True))
    except (ProfileValidationError, ProfileNotFoundError) as e:
        _raise_for(e)


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    profile_id: str = Path(...),
    service: ProfileService = Depends(get_profile_service),
) -> Response:
    try:
        service.delete_profile(profile_id)
    except ProfileNotFoundError as e:
        _raise_for(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{profile_id}/ratings/{exercise_id}", response_model=Profile)
def set_rating(
    request: RatingRequest,
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """Set the lifter's level on an exercise by hand."""
    validate_exercise_id(exercise_id)
    try:
        return service.update_exercise_rating(profile_id, exercise_id, request.level)
    except ProfileNotFoundError as e:
        _raise_for(e)


@router.delete("/{profile_id}/ratings/{exercise_id}", response_model=Profile)
def remove_rating(
    profile_id: str = Path(...),
    exercise_id: str = Path(...),
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    validate_exercise_id(exercise_id)
    try:
        return service.remove_exercise_rating(profile_id, exercise_id)
    except ProfileNotFoundError as e:
        _raise_for(e)
