"""
Daily workout summaries.

Aggregates one day's WorkoutRecords for a profile into totals (sets, reps,
volume, estimated calories) and a per-exercise breakdown, plus a volume
series for progress charts. Only complete sets count.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from application.ports import ExerciseCatalog
from backend.core.profile_service import ProfileService
from backend.core.workout_history import WorkoutHistoryStore, format_session_date

logger = logging.getLogger(__name__)

# Moderate-intensity resistance training
WEIGHT_TRAINING_MET = 5.0
# About 30s under the bar plus 90s rest
MINUTES_PER_SET = 2
DEFAULT_BODYWEIGHT_KG = 70.0


def estimate_calories_burned(total_sets: int, bodyweight_kg: float) -> int:
    """
    Rough kcal estimate for a lifting session.

    kcal = MET * bodyweight(kg) * hours, with hours derived from set count.

    Examples:
        >>> estimate_calories_burned(15, 80)
        200
    """
    hours = total_sets * MINUTES_PER_SET / 60
    return round(WEIGHT_TRAINING_MET * bodyweight_kg * hours)


@dataclass
class BestSet:
    weight: float = 0.0
    reps: int = 0


@dataclass
class DailyExerciseSummary:
    """One exercise's contribution to a day."""

    exercise_id: str
    name: str
    body_part: str
    sets: int
    max_weight: float
    total_volume: float
    best_set: BestSet


@dataclass
class DailySummary:
    """Everything trained on one date."""

    date: str
    display_date: str  # "TODAY" or "Feb 10"
    full_date: str  # "Monday, Feb 10"
    exercise_count: int
    total_sets: int
    total_volume: int
    total_reps: int
    estimated_calories: int
    exercises: List[DailyExerciseSummary] = field(default_factory=list)


@dataclass
class DailyVolumePoint:
    date: str
    display_date: str
    volume: int
    sets: int


class DailySummaryService:
    """Read-only views over workout history, one day at a time."""

    def __init__(
        self,
        history: WorkoutHistoryStore,
        catalog: ExerciseCatalog,
        profiles: ProfileService,
    ):
        self._history = history
        self._catalog = catalog
        self._profiles = profiles

    def get_daily_summary(self, profile_id: str, date_str: str) -> Optional[DailySummary]:
        """
        Summary of a profile's training on a date.

        Records for exercises missing from the catalog are skipped, as are
        exercises with no complete sets.

        Returns:
            DailySummary, or None if nothing was logged that day
        """
        records = self._history.get_records_for_date(profile_id, date_str)
        if not records:
            return None

        exercises: List[DailyExerciseSummary] = []
        total_sets = 0
        total_volume = 0.0
        total_reps = 0

        for record in records:
            exercise = self._catalog.get_by_id(record.exercise_id)
            if exercise is None:
                logger.warning(f"Skipping record for unknown exercise {record.exercise_id}")
                continue

            sets = record.complete_sets
            if not sets:
                continue

            best = BestSet()
            for s in sets:
                if s.weight > best.weight:
                    best = BestSet(weight=s.weight, reps=s.reps)

            volume = sum(s.volume for s in sets)
            total_sets += len(sets)
            total_volume += volume
            total_reps += sum(s.reps for s in sets)

            exercises.append(
                DailyExerciseSummary(
                    exercise_id=record.exercise_id,
                    name=exercise.name,
                    body_part=exercise.body_part.value,
                    sets=len(sets),
                    max_weight=best.weight,
                    total_volume=volume,
                    best_set=best,
                )
            )

        profile = self._profiles.get_profile(profile_id)
        bodyweight = profile.weight if profile else DEFAULT_BODYWEIGHT_KG

        parsed = datetime.strptime(date_str, "%Y-%m-%d")
        return DailySummary(
            date=date_str,
            display_date=format_session_date(date_str, self._history.today()),
            full_date=f"{parsed.strftime('%A, %b')} {parsed.day}",
            exercise_count=len(exercises),
            total_sets=total_sets,
            total_volume=round(total_volume),
            total_reps=total_reps,
            estimated_calories=estimate_calories_burned(total_sets, bodyweight),
            exercises=exercises,
        )

    def get_daily_volume_history(
        self,
        profile_id: str,
        max_days: int = 14,
    ) -> List[DailyVolumePoint]:
        """
        Total volume for the most recent `max_days` training days.

        Days with zero volume are dropped. Oldest first, for charting.
        """
        points = []
        for date_str in self._history.get_workout_dates(profile_id)[:max_days]:
            summary = self.get_daily_summary(profile_id, date_str)
            if summary is None or summary.total_volume <= 0:
                continue
            points.append(
                DailyVolumePoint(
                    date=date_str,
                    display_date=summary.display_date,
                    volume=summary.total_volume,
                    sets=summary.total_sets,
                )
            )
        points.reverse()
        return points
