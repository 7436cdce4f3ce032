"""
Workout routines.

A routine is a named split of training days, each listing catalog exercise
ids. Predefined routines ship with the app; custom ones are stored per device.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkoutDay(BaseModel):
    """One training day of a routine."""
    name: str = Field(..., min_length=1, max_length=60)
    exercises: List[str] = Field(default_factory=list)


class WorkoutRoutine(BaseModel):
    """
    A training split.

    Predefined routines have a fixed id (e.g. "ppl"); custom routines get
    "custom-<epoch ms>" and is_custom=True.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=80)
    description: str = ""
    days_per_week: int = Field(..., ge=1, le=7)
    days: List[WorkoutDay] = Field(..., min_length=1)
    is_custom: bool = False
    created_at: Optional[datetime] = None

    @property
    def exercise_ids(self) -> List[str]:
        """Every exercise across all days, first occurrence order, no repeats."""
        seen: List[str] = []
        for day in self.days:
            for exercise_id in day.exercises:
                if exercise_id not in seen:
                    seen.append(exercise_id)
        return seen


class RoutineSelection(BaseModel):
    """The routine the lifter is following and the day they picked it."""
    routine_id: str
    selected_on: date


class RoutineExercises(BaseModel):
    """Exercises the lifter chose to track for one routine."""
    routine_id: str
    exercises: List[str] = Field(default_factory=list)


class InProgressExercise(BaseModel):
    """The exercise currently open on the logging screen, scoped to one day."""
    exercise_id: str
    date: date
