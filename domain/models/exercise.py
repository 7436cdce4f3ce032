"""
Exercise catalog entry and its strength standards.

Exercises are static reference data loaded once at startup from the catalog
dictionary. Each carries bodyweight ratios for the four strength levels.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field, model_validator

from domain.models.level import LEVEL_ORDER, Level


class BodyPart(str, Enum):
    """Body part an exercise primarily trains."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    LEGS = "legs"
    ARMS = "arms"
    CORE = "core"


class StrengthStandards(BaseModel):
    """
    Bodyweight multipliers for each strength level.

    A threshold is `bodyweight * ratio[level]`, scaled by `female_multiplier`
    for female lifters. Ratios must be strictly increasing in level order so
    that thresholds are strictly increasing for any positive bodyweight.

    Examples:
        >>> standards = StrengthStandards(
        ...     beginner=0.5, novice=0.75, intermediate=1.0, advanced=1.25
        ... )
        >>> standards.ratio(Level.INTERMEDIATE)
        1.0
    """

    beginner: float = Field(..., gt=0, description="Bodyweight ratio for beginner")
    novice: float = Field(..., gt=0, description="Bodyweight ratio for novice")
    intermediate: float = Field(
        ..., gt=0, description="Bodyweight ratio for intermediate"
    )
    advanced: float = Field(..., gt=0, description="Bodyweight ratio for advanced")
    female_multiplier: float = Field(
        default=0.65,
        gt=0,
        le=1,
        description="Scale applied to every ratio for female lifters",
    )

    @model_validator(mode="after")
    def validate_increasing(self) -> "StrengthStandards":
        """Ratios must strictly increase from beginner to advanced."""
        ratios = [self.ratio(level) for level in LEVEL_ORDER]
        if any(lower >= upper for lower, upper in zip(ratios, ratios[1:])):
            raise ValueError(
                "Strength ratios must be strictly increasing by level, got "
                f"{ratios}"
            )
        return self

    def ratio(self, level: Level) -> float:
        """Bodyweight ratio for a level."""
        return getattr(self, Level(level).value)

    def as_dict(self) -> Dict[Level, float]:
        """All ratios keyed by level."""
        return {level: self.ratio(level) for level in LEVEL_ORDER}

    model_config = {"frozen": True}


class Exercise(BaseModel):
    """
    Immutable catalog exercise.

    For dumbbell exercises (`is_dumbbell=True`) every weight, logged or
    computed, is per hand.
    """

    id: str = Field(..., min_length=1, description="Stable exercise identifier")
    name: str = Field(..., min_length=1, description="Display name")
    body_part: BodyPart = Field(..., description="Primary body part")
    is_dumbbell: bool = Field(
        default=False, description="Weights are per hand when True"
    )
    standards: StrengthStandards = Field(..., description="Level ratios")

    def __str__(self) -> str:
        suffix = " (per hand)" if self.is_dumbbell else ""
        return f"{self.name}{suffix}"

    model_config = {"frozen": True}
