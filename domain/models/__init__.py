"""
Domain models for StrengthProfile.

Pure pydantic models, independent of storage and transport:
- Profile: a lifter with bodyweight and per-exercise ratings
- Exercise: static catalog entry with strength standards
- WorkoutRecord / WorkoutSet: persisted per-day history
- ActiveSession: the single in-progress workout session
- Level / Sex / BodyPart: enums
- Load: a user-entered weight with its unit
- TimerSettings: rest timer preferences
- WorkoutRoutine / WorkoutDay: training splits and the selected routine
- InProgressExercise: the exercise open on the logging screen

Usage:
    >>> from domain.models import WorkoutRecord, WorkoutSet

    >>> record = WorkoutRecord(
    ...     id="w1",
    ...     date="2026-01-05",
    ...     profile_id="p1",
    ...     exercise_id="bench-press",
    ...     sets=[WorkoutSet(weight=80, reps=5)],
    ... )
    >>> record.max_weight
    80.0

    >>> # Round-trip through JSON
    >>> WorkoutRecord.model_validate_json(record.model_dump_json()) == record
    True
"""

from domain.models.active_session import (
    AUTO_END_THRESHOLD_MINUTES,
    INACTIVITY_THRESHOLD_MINUTES,
    ActiveSession,
    LevelUp,
    PRAchievement,
    SessionExercise,
    SessionSet,
    format_session_duration,
)
from domain.models.exercise import BodyPart, Exercise, StrengthStandards
from domain.models.level import LEVEL_ORDER, Level, Sex, level_index
from domain.models.load import Load, WeightUnit
from domain.models.profile import Profile, validate_profile_fields
from domain.models.routine import (
    InProgressExercise,
    RoutineExercises,
    RoutineSelection,
    WorkoutDay,
    WorkoutRoutine,
)
from domain.models.timer import ExerciseTimerHistory, TimerSettings
from domain.models.workout import WorkoutRecord, WorkoutSet

__all__ = [
    # Main entities
    "Profile",
    "Exercise",
    "StrengthStandards",
    "WorkoutRecord",
    "WorkoutSet",
    "ActiveSession",
    "SessionExercise",
    "SessionSet",
    "PRAchievement",
    "LevelUp",
    "Load",
    "TimerSettings",
    "ExerciseTimerHistory",
    "WorkoutRoutine",
    "WorkoutDay",
    "RoutineSelection",
    "RoutineExercises",
    "InProgressExercise",
    # Enums and ordering
    "Level",
    "Sex",
    "BodyPart",
    "LEVEL_ORDER",
    "level_index",
    "WeightUnit",
    # Helpers
    "validate_profile_fields",
    "format_session_duration",
    "AUTO_END_THRESHOLD_MINUTES",
    "INACTIVITY_THRESHOLD_MINUTES",
]
