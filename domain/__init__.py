"""
Domain layer for StrengthProfile.

This package contains pure domain models that are independent of
infrastructure concerns (storage, sync, HTTP).
"""

from domain.models import (
    ActiveSession,
    Exercise,
    Level,
    Profile,
    WorkoutRecord,
    WorkoutSet,
)

__all__ = [
    "ActiveSession",
    "Exercise",
    "Level",
    "Profile",
    "WorkoutRecord",
    "WorkoutSet",
]
