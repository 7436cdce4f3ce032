"""
Rest timer preferences.
"""

from pydantic import BaseModel, Field


DEFAULT_REST_SECONDS = 90


class TimerSettings(BaseModel):
    """User preferences for the rest timer between sets."""

    default_duration: int = Field(
        default=DEFAULT_REST_SECONDS,
        ge=5,
        le=900,
        description="Rest duration in seconds when an exercise has no history",
    )
    sound_enabled: bool = True
    vibration_enabled: bool = True
    keep_awake_during_workout: bool = True


class ExerciseTimerHistory(BaseModel):
    """Last rest duration the user chose for an exercise."""

    exercise_id: str = Field(..., min_length=1)
    last_duration: int = Field(..., ge=0)


def format_time(seconds: int) -> str:
    """
    Format seconds as M:SS, with a leading minus for overtime.

    Examples:
        >>> format_time(90)
        '1:30'
        >>> format_time(-5)
        '-0:05'
    """
    minutes, secs = divmod(abs(seconds), 60)
    sign = "-" if seconds < 0 else ""
    return f"{sign}{minutes}:{secs:02d}"
