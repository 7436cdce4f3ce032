"""
Lifter profile.

A profile owns its exercise ratings; workouts and the active session only
refer to it by id. Bodyweight (`weight`, kg) is the basis for every strength
threshold.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models.level import Level, Sex


@dataclass(frozen=True)
class Range:
    """Inclusive numeric range for a profile field."""
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


# Input constraints enforced when a profile is created or updated
MAX_PROFILES = 10
NAME_LENGTH = Range(1, 50)
AGE_RANGE = Range(13, 100)
HEIGHT_RANGE = Range(100, 250)
WEIGHT_RANGE = Range(30, 300)
DAILY_STEPS_RANGE = Range(0, 100_000)


class Profile(BaseModel):
    """
    A lifter profile as persisted.

    Structural validation only (types). Range checks live in
    `validate_profile_fields` and run at the create/update boundary, so a
    stored profile that predates a range change still loads.
    """

    id: str = Field(..., min_length=1)
    name: str
    age: int
    height: float = Field(..., description="Height in cm")
    weight: float = Field(..., description="Bodyweight in kg")
    sex: Optional[Sex] = None
    daily_steps: Optional[int] = None
    activity_level: Optional[str] = None
    goal: Optional[str] = None
    exercise_ratings: Dict[str, Level] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    def rating_for(self, exercise_id: str) -> Optional[Level]:
        """Last recorded level for an exercise, or None if unrated."""
        return self.exercise_ratings.get(exercise_id)


def validate_profile_fields(data: Dict[str, Any]) -> List[str]:
    """
    Check user-supplied profile fields against the allowed ranges.

    Only keys present in `data` (and not None) are checked, so this works for
    both full creates and partial updates.

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    name = data.get("name")
    if name is not None:
        trimmed = name.strip()
        if len(trimmed) < NAME_LENGTH.min:
            errors.append("Name is required")
        elif len(trimmed) > NAME_LENGTH.max:
            errors.append(f"Name must be {int(NAME_LENGTH.max)} characters or less")

    checks = [
        ("age", AGE_RANGE, "Age must be between {min} and {max}"),
        ("height", HEIGHT_RANGE, "Height must be between {min} and {max} cm"),
        ("weight", WEIGHT_RANGE, "Weight must be between {min} and {max} kg"),
        (
            "daily_steps",
            DAILY_STEPS_RANGE,
            "Daily steps must be between {min} and {max}",
        ),
    ]
    for field_name, allowed, message in checks:
        value = data.get(field_name)
        if value is not None and not allowed.contains(value):
            errors.append(message.format(min=int(allowed.min), max=int(allowed.max)))

    return errors
