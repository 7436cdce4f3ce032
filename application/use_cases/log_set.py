"""
LogSet Use Case.

Orchestrates what happens when the lifter logs a set:
persist today's history record, append to the active session, detect a PR,
check for a level promotion and write any new rating back to the profile.
Returns the resulting events for the caller to display.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from application.ports import ExerciseCatalog
from backend.core.profile_service import ProfileService
from backend.core.progression_service import (
    ProgressionService,
    celebration_message,
    downgrade_message,
)
from backend.core.session_manager import ActiveSessionManager
from backend.core.workout_history import WorkoutHistoryStore
from domain.models import ActiveSession, Level, WorkoutRecord, WorkoutSet

logger = logging.getLogger(__name__)


@dataclass
class LogSetResult:
    """Result of the LogSet use case execution."""

    success: bool
    record: Optional[WorkoutRecord] = None
    session: Optional[ActiveSession] = None
    is_pr: bool = False
    pr_message: Optional[str] = None
    level_up: Optional[Level] = None
    level_up_message: Optional[str] = None
    error: Optional[str] = None
    # "not_found" or "invalid" when success is False
    error_type: Optional[str] = None


@dataclass
class DowngradeResult:
    """A demotion that was applied to the profile."""

    exercise_id: str
    previous_level: Level
    new_level: Level
    message: str


class LogSetUseCase:
    """
    Use case for logging one set of an exercise.

    Orchestrates the following workflow:
    1. Resolve profile and exercise
    2. Check the set for a PR (baseline excludes today)
    3. Upsert today's history record with the full set list
    4. Append the set, its PR and any level promotion to the active
       session in one write (auto-starting it)
    5. Persist a promotion as the profile's new exercise rating

    Warm-up sets are saved but never count as PRs or promotions.

    Usage:
        >>> use_case = LogSetUseCase(
        ...     session_manager=session_manager,
        ...     history=history,
        ...     progression=progression,
        ...     profiles=profiles,
        ...     catalog=catalog,
        ... )
        >>> result = use_case.execute(
        ...     profile_id="profile_1",
        ...     exercise_id="bench-press",
        ...     sets=[WorkoutSet(weight=85, reps=5)],
        ...     set_index=0,
        ... )
        >>> result.level_up
        <Level.INTERMEDIATE: 'intermediate'>
    """

    def __init__(
        self,
        session_manager: ActiveSessionManager,
        history: WorkoutHistoryStore,
        progression: ProgressionService,
        profiles: ProfileService,
        catalog: ExerciseCatalog,
    ) -> None:
        self._session_manager = session_manager
        self._history = history
        self._progression = progression
        self._profiles = profiles
        self._catalog = catalog

    def execute(
        self,
        profile_id: str,
        exercise_id: str,
        sets: List[WorkoutSet],
        set_index: int,
        is_warmup: Optional[bool] = None,
        completed_sets: Optional[List[int]] = None,
    ) -> LogSetResult:
        """
        Log the set at `set_index` of today's set list.

        Args:
            profile_id: Lifter profile
            exercise_id: Catalog exercise id
            sets: Today's full, ordered set list for the exercise
            set_index: Which set was just logged
            is_warmup: Whether that set is a warm-up
            completed_sets: Indices marked done (kept as stored if None)

        Returns:
            LogSetResult with the saved record, session and any events
        """
        profile = self._profiles.get_profile(profile_id)
        if profile is None:
            return LogSetResult(
                success=False,
                error=f"Profile not found: {profile_id}",
                error_type="not_found",
            )

        exercise = self._catalog.get_by_id(exercise_id)
        if exercise is None:
            return LogSetResult(
                success=False,
                error=f"Unknown exercise: {exercise_id}",
                error_type="not_found",
            )

        if not 0 <= set_index < len(sets):
            return LogSetResult(
                success=False,
                error=f"Set index {set_index} out of range for {len(sets)} set(s)",
                error_type="invalid",
            )

        logged = sets[set_index]

        # Decide PR status before today's record is rewritten
        counts_for_progress = logged.is_complete and not is_warmup
        is_pr = counts_for_progress and self._progression.is_new_pr(
            profile_id, exercise_id, logged.weight
        )

        record = self._history.save_session(profile_id, exercise_id, sets, completed_sets)

        if not logged.is_complete:
            # Nothing to add to the session until both weight and reps are in
            return LogSetResult(
                success=True,
                record=record,
                session=self._session_manager.get_session(),
            )

        result = LogSetResult(success=True, record=record, is_pr=is_pr)

        new_level = None
        if counts_for_progress:
            new_level = self._progression.check_level_upgrade(
                exercise_id,
                profile.weight,
                logged.weight,
                profile.rating_for(exercise_id),
                profile.sex,
            )

        # Set, PR and level-up land in the session as one write
        result.session = self._session_manager.append_set(
            exercise_id,
            exercise.name,
            logged.weight,
            logged.reps,
            is_warmup,
            pr=is_pr,
            level_up=new_level,
        )

        if is_pr:
            result.pr_message = celebration_message(exercise.name)
            logger.info(f"New PR for {profile_id} on {exercise_id}: {logged.weight}kg")

        if new_level is not None:
            self._profiles.update_exercise_rating(profile_id, exercise_id, new_level)
            result.level_up = new_level
            result.level_up_message = (
                f"LEVEL UP! You're now {new_level.display_name} at {exercise.name}!"
            )
            logger.info(f"Level up for {profile_id} on {exercise_id}: {new_level.value}")

        return result

    def evaluate_downgrade(
        self,
        profile_id: str,
        exercise_id: str,
    ) -> Optional[DowngradeResult]:
        """
        Apply a level demotion if recent sessions call for one.

        Returns:
            DowngradeResult if the profile's rating was lowered, else None
        """
        profile = self._profiles.get_profile(profile_id)
        if profile is None:
            return None

        current = profile.rating_for(exercise_id)
        new_level = self._progression.check_level_downgrade(
            profile_id,
            exercise_id,
            profile.weight,
            current,
            profile.sex,
        )
        if new_level is None:
            return None

        self._profiles.update_exercise_rating(profile_id, exercise_id, new_level)
        return DowngradeResult(
            exercise_id=exercise_id,
            previous_level=current,
            new_level=new_level,
            message=downgrade_message(new_level),
        )
