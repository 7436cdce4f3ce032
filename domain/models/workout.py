"""
Persisted workout history records.

A WorkoutRecord holds one exercise's sets for one profile on one local
calendar day. There is at most one record per (profile_id, exercise_id, date);
later sets that day update it in place.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class WorkoutSet(BaseModel):
    """
    A single logged set.

    Either field may be None while the user is still filling the set in.
    Such a set is incomplete and is ignored by every aggregate.

    Examples:
        >>> WorkoutSet(weight=100, reps=5).is_complete
        True
        >>> WorkoutSet(weight=100, reps=None).is_complete
        False
    """

    weight: Optional[float] = Field(default=None, ge=0, description="Weight in kg")
    reps: Optional[int] = Field(default=None, ge=0, description="Repetitions")

    @property
    def is_complete(self) -> bool:
        """True when both weight and reps are set."""
        return self.weight is not None and self.reps is not None

    @property
    def volume(self) -> float:
        """weight * reps, or 0 for an incomplete set."""
        if not self.is_complete:
            return 0.0
        return self.weight * self.reps


class WorkoutRecord(BaseModel):
    """One exercise's sets for a profile on a given day."""

    id: str = Field(..., min_length=1)
    date: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Local calendar date (YYYY-MM-DD)",
    )
    profile_id: str = Field(..., min_length=1)
    exercise_id: str = Field(..., min_length=1)
    sets: List[WorkoutSet] = Field(default_factory=list)
    completed_sets: Optional[List[int]] = Field(
        default=None, description="Indices of sets marked done"
    )

    @property
    def complete_sets(self) -> List[WorkoutSet]:
        """Sets with both weight and reps."""
        return [s for s in self.sets if s.is_complete]

    @property
    def max_weight(self) -> float:
        """
        Heaviest weight among complete sets, 0 when there is none.

        PR baselines and the demotion window both read history through this.
        """
        return max((s.weight for s in self.complete_sets), default=0.0)

    @property
    def has_weight(self) -> bool:
        """True if at least one set has a positive weight."""
        return any(s.weight is not None and s.weight > 0 for s in self.sets)
