"""
Progression Service for strength levels and personal records.

This module decides, from logged history plus bodyweight:
- Whether a lift is a new personal record (PR)
- Which level a lifted weight corresponds to
- Whether a new PR promotes the lifter to a higher level
- Whether a run of weak sessions demotes the lifter to a lower level

Absence of data (unknown exercise, no history, too little history) is a
normal condition here and is reported as None/False/0, never raised.
"""
import logging
import random
from typing import Dict, Optional

from application.ports import ExerciseCatalog
from backend.core.strength import classify_weight, compute_thresholds
from backend.core.workout_history import WorkoutHistoryStore
from domain.models import Level, Sex, level_index

logger = logging.getLogger(__name__)


# Sessions looked back over before demoting a level
DEFAULT_LOOKBACK_WORKOUTS = 4


# =============================================================================
# User-facing messages
# =============================================================================


PR_CELEBRATIONS = [
    "NEW PR! {exercise}! You're crushing it!",
    "BOOM! New {exercise} record! Way to go!",
    "YES! That's a new {exercise} PR! Beast mode!",
    "NEW PERSONAL BEST! {exercise}! You're unstoppable!",
    "INCREDIBLE! New {exercise} PR! Keep that energy!",
    "LIFT OFF! You just hit a new {exercise} record!",
    "New {exercise} PR achieved! Take a bow.",
    "STELLAR! New {exercise} PR! The gains are real!",
    "SMASHED IT! New {exercise} record! Legendary!",
    "CELEBRATION TIME! New {exercise} PR! You're on fire!",
]

DOWNGRADE_MESSAGES = [
    "Level adjusted to {level}. Keep pushing to get back up!",
    "Dropped to {level}. You've got this - time to rebuild!",
    "Now at {level}. Every champion has setbacks. Come back stronger!",
    "Reset to {level}. Focus on form and the gains will follow!",
]


def celebration_message(exercise_name: str, rng: Optional[random.Random] = None) -> str:
    """Random PR celebration for an exercise."""
    chooser = rng or random
    return chooser.choice(PR_CELEBRATIONS).format(exercise=exercise_name)


def downgrade_message(level: Level, rng: Optional[random.Random] = None) -> str:
    """Random encouragement shown when a level drops."""
    chooser = rng or random
    return chooser.choice(DOWNGRADE_MESSAGES).format(level=Level(level).display_name)


# =============================================================================
# Progression Service
# =============================================================================


class ProgressionService:
    """
    Strength level and PR decisions.

    Reads history through WorkoutHistoryStore and thresholds through the
    exercise catalog. Holds no state of its own.
    """

    def __init__(
        self,
        history: WorkoutHistoryStore,
        catalog: ExerciseCatalog,
        *,
        lookback_workouts: int = DEFAULT_LOOKBACK_WORKOUTS,
    ):
        """
        Initialize the progression service.

        Args:
            history: Workout history store
            catalog: Exercise catalog for strength standards
            lookback_workouts: Default demotion window size
        """
        self._history = history
        self._catalog = catalog
        self._lookback_workouts = lookback_workouts

    # -------------------------------------------------------------------------
    # Thresholds and classification
    # -------------------------------------------------------------------------

    def get_level_thresholds(
        self,
        exercise_id: str,
        bodyweight: float,
        sex: Optional[Sex] = None,
    ) -> Optional[Dict[Level, float]]:
        """
        Weight thresholds for every level of an exercise.

        Returns:
            Dict of level -> kg, or None if the exercise is not in the catalog
        """
        exercise = self._catalog.get_by_id(exercise_id)
        if exercise is None:
            logger.warning(f"Exercise not found: {exercise_id}")
            return None
        return compute_thresholds(bodyweight, exercise, sex)

    def get_level_for_weight(
        self,
        exercise_id: str,
        bodyweight: float,
        lifted_weight: float,
        sex: Optional[Sex] = None,
    ) -> Level:
        """
        Level a lifted weight corresponds to.

        The highest level whose threshold is met or exceeded; beginner if
        none is, or if the exercise is unknown.
        """
        thresholds = self.get_level_thresholds(exercise_id, bodyweight, sex)
        if thresholds is None:
            return Level.BEGINNER
        return classify_weight(thresholds, lifted_weight)

    # -------------------------------------------------------------------------
    # Personal records
    # -------------------------------------------------------------------------

    def get_exercise_pr(self, profile_id: str, exercise_id: str) -> float:
        """Heaviest complete set ever logged (0 if none)."""
        return self._history.get_exercise_pr(profile_id, exercise_id)

    def is_new_pr(
        self,
        profile_id: str,
        exercise_id: str,
        new_weight: float,
    ) -> bool:
        """
        Whether a weight beats every previous day's best.

        Today's records are excluded from the baseline, so each improving set
        within today's session counts as a PR against the same frozen
        baseline. With no earlier history there is nothing to beat: a
        first-ever lift is not a PR.
        """
        today = self._history.today()
        previous_max = max(
            (
                r.max_weight
                for r in self._history.get_profile_exercise_records(profile_id, exercise_id)
                if r.date != today
            ),
            default=0.0,
        )
        return previous_max > 0 and new_weight > previous_max

    # -------------------------------------------------------------------------
    # Level transitions
    # -------------------------------------------------------------------------

    def check_level_upgrade(
        self,
        exercise_id: str,
        bodyweight: float,
        new_pr: float,
        current_level: Optional[Level],
        sex: Optional[Sex] = None,
    ) -> Optional[Level]:
        """
        Promotion earned by a new PR weight.

        An unrated exercise (current_level None) ranks below beginner, so any
        achieved level is a promotion.

        Returns:
            The achieved level if strictly higher than current, else None
        """
        thresholds = self.get_level_thresholds(exercise_id, bodyweight, sex)
        if thresholds is None:
            return None

        achieved = classify_weight(thresholds, new_pr)
        if achieved.index > level_index(current_level):
            return achieved
        return None

    def check_level_downgrade(
        self,
        profile_id: str,
        exercise_id: str,
        bodyweight: float,
        current_level: Optional[Level],
        sex: Optional[Sex] = None,
        lookback_workouts: Optional[int] = None,
    ) -> Optional[Level]:
        """
        Demotion after a run of sessions below the current level.

        Looks at the last `lookback_workouts` stored sessions for the exercise
        (however far apart they are). If any one of them reached the current
        level's threshold, the level holds. Only when none did is the best
        weight across the window reclassified, and a strictly lower level is
        returned.

        Returns:
            The lower level, or None (level holds, nothing to demote from, or
            too few sessions to judge)
        """
        if current_level is None or Level(current_level) == Level.BEGINNER:
            return None

        lookback = self._lookback_workouts if lookback_workouts is None else lookback_workouts
        if lookback < 1:
            return None

        thresholds = self.get_level_thresholds(exercise_id, bodyweight, sex)
        if thresholds is None:
            return None

        sessions = self._history.get_exercise_sessions(profile_id, exercise_id, lookback)
        if len(sessions) < lookback:
            return None

        session_maxes = [s.max_weight for s in sessions]
        current_threshold = thresholds[Level(current_level)]

        if any(session_max >= current_threshold for session_max in session_maxes):
            return None

        achieved = classify_weight(thresholds, max(session_maxes))
        if achieved.index < level_index(current_level):
            logger.info(
                f"Level downgrade for {exercise_id}: {Level(current_level).value} -> "
                f"{achieved.value} (best {max(session_maxes)}kg over {lookback} sessions)"
            )
            return achieved
        return None
