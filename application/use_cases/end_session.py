"""
EndSession Use Case.

Builds the end-of-workout summary from the active session and clears the
session once the lifter dismisses it. Also surfaces an unfinished session
left over from earlier (e.g. yesterday) exactly once.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from backend.core.session_manager import ActiveSessionManager
from domain.models import ActiveSession, LevelUp, PRAchievement, format_session_duration

logger = logging.getLogger(__name__)


@dataclass
class ExerciseSummary:
    exercise_id: str
    name: str
    sets: int
    working_sets: int
    max_weight: float


@dataclass
class SessionSummary:
    """What the summary screen shows."""

    duration_text: str
    duration_minutes: int
    exercise_count: int
    total_sets: int
    working_sets: int
    total_volume: float
    exercises: List[ExerciseSummary] = field(default_factory=list)
    prs: List[PRAchievement] = field(default_factory=list)
    level_ups: List[LevelUp] = field(default_factory=list)


def build_summary(session: ActiveSession) -> SessionSummary:
    """Summarize a session snapshot."""
    exercises = [
        ExerciseSummary(
            exercise_id=exercise_id,
            name=exercise.name,
            sets=len(exercise.sets),
            working_sets=sum(1 for s in exercise.sets if not s.is_warmup),
            max_weight=max((s.weight for s in exercise.sets), default=0.0),
        )
        for exercise_id, exercise in session.exercises.items()
    ]
    return SessionSummary(
        duration_text=format_session_duration(session),
        duration_minutes=int(session.duration.total_seconds() // 60),
        exercise_count=len(exercises),
        total_sets=session.total_sets,
        working_sets=session.working_sets,
        total_volume=session.total_volume,
        exercises=exercises,
        prs=list(session.prs_achieved),
        level_ups=list(session.level_ups),
    )


class EndSessionUseCase:
    """
    Use case for finishing a workout session.

    Usage:
        >>> use_case = EndSessionUseCase(session_manager=session_manager)
        >>> summary = use_case.summary()
        >>> use_case.dismiss()
    """

    def __init__(self, session_manager: ActiveSessionManager) -> None:
        self._session_manager = session_manager

    def summary(self) -> Optional[SessionSummary]:
        """Summary of the active session, or None if there is none."""
        session = self._session_manager.finalize()
        if session is None or not session.has_workout_data:
            return None
        return build_summary(session)

    def dismiss(self) -> None:
        """Clear the session after its summary was shown."""
        self._session_manager.clear()
        logger.info("Workout session ended")

    def recover_stale(self) -> Optional[SessionSummary]:
        """
        Summary of a stale unfinished session, returned once.

        The stale session is cleared whether or not it had data.
        """
        session = self._session_manager.check_for_stale_session()
        if session is None:
            return None
        logger.info(
            f"Recovered stale session from {session.start_time.isoformat()}"
        )
        return build_summary(session)
