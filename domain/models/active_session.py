"""
The in-progress workout session.

There is at most one active session per device. It is created when the first
set is logged, updated on every set, and either cleared when the user dismisses
its summary or discarded once it goes stale.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models.level import Level


# Minutes without activity before the UI asks "still training?"
INACTIVITY_THRESHOLD_MINUTES = 20

# Minutes without activity after which the session is considered over
AUTO_END_THRESHOLD_MINUTES = 120


class SessionSet(BaseModel):
    """A set as recorded in the active session."""
    weight: float
    reps: int
    is_warmup: Optional[bool] = None
    timestamp: Optional[datetime] = None


class SessionExercise(BaseModel):
    """Sets logged for one exercise during the session."""
    name: str
    sets: List[SessionSet] = Field(default_factory=list)


class PRAchievement(BaseModel):
    """A personal record hit during the session."""
    exercise_id: str
    exercise_name: str
    weight: float
    reps: int


class LevelUp(BaseModel):
    """A level promotion earned during the session."""
    exercise_id: str
    exercise_name: str
    new_level: Level


class ActiveSession(BaseModel):
    """
    Snapshot of the current workout session.

    `start_time` and `last_activity_time` are local wall-clock times taken
    from the injected clock.
    """

    start_time: datetime
    last_activity_time: datetime
    exercises: Dict[str, SessionExercise] = Field(default_factory=dict)
    prs_achieved: List[PRAchievement] = Field(default_factory=list)
    level_ups: List[LevelUp] = Field(default_factory=list)

    def is_stale(
        self,
        now: datetime,
        auto_end_minutes: int = AUTO_END_THRESHOLD_MINUTES,
    ) -> bool:
        """
        Whether this session should no longer be treated as active.

        Stale if it started on a different calendar day than `now`, or if
        `auto_end_minutes` or more have passed since the last logged set.
        """
        if self.start_time.date() != now.date():
            return True
        return self.minutes_since_activity(now) >= auto_end_minutes

    def minutes_since_activity(self, now: datetime) -> float:
        """Minutes elapsed since the last logged set."""
        return (now - self.last_activity_time) / timedelta(minutes=1)

    @property
    def duration(self) -> timedelta:
        """Time from the session start to the last logged set."""
        return self.last_activity_time - self.start_time

    @property
    def has_workout_data(self) -> bool:
        """True once at least one exercise has been logged."""
        return bool(self.exercises)

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises.values())

    @property
    def working_sets(self) -> int:
        """Sets not flagged as warm-up."""
        return sum(
            1
            for e in self.exercises.values()
            for s in e.sets
            if not s.is_warmup
        )

    @property
    def total_volume(self) -> float:
        """Sum of weight * reps over working sets."""
        return sum(
            s.weight * s.reps
            for e in self.exercises.values()
            for s in e.sets
            if not s.is_warmup
        )


def format_session_duration(session: ActiveSession) -> str:
    """
    Format a session's duration as "1h 5m" or "12m".

    Uses last activity as the end time, so idle time after the final set is
    not counted.
    """
    total_minutes = int(session.duration.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
