"""
Strength Calculator.

Turns bodyweight-relative strength standards into absolute weight thresholds.
All functions here are pure.
"""
from typing import Dict, Optional

from domain.models import LEVEL_ORDER, Exercise, Level, Sex


def compute_threshold(
    bodyweight_kg: float,
    exercise: Exercise,
    level: Level,
    sex: Optional[Sex] = None,
) -> float:
    """
    Weight needed to reach a level on an exercise.

    Formula: threshold = bodyweight * ratio[level] (* female_multiplier)

    For dumbbell exercises the result is per hand. Because the catalog's
    ratios strictly increase by level, thresholds do too for any positive
    bodyweight.

    Args:
        bodyweight_kg: Lifter's bodyweight in kg
        exercise: Catalog exercise
        level: Target level
        sex: Optional sex; female lifters get scaled-down thresholds

    Returns:
        Threshold in kg (unrounded; display rounding is up to the caller)
    """
    ratio = exercise.standards.ratio(level)
    if sex == Sex.FEMALE:
        ratio *= exercise.standards.female_multiplier
    return max(bodyweight_kg, 0.0) * ratio


def compute_thresholds(
    bodyweight_kg: float,
    exercise: Exercise,
    sex: Optional[Sex] = None,
) -> Dict[Level, float]:
    """Thresholds for every level, in level order."""
    return {
        level: compute_threshold(bodyweight_kg, exercise, level, sex)
        for level in LEVEL_ORDER
    }


def classify_weight(thresholds: Dict[Level, float], lifted_weight: float) -> Level:
    """
    Highest level whose threshold the lifted weight meets or exceeds.

    Checks from advanced downwards; anything below novice is beginner.
    """
    for level in reversed(LEVEL_ORDER):
        if lifted_weight >= thresholds[level]:
            return level
    return Level.BEGINNER
