"""
Strength level and sex enums.

Levels form a total order (beginner < novice < intermediate < advanced).
Promotion and demotion are plain index comparisons on that order.
"""

from enum import Enum
from typing import List, Optional


class Level(str, Enum):
    """Strength level for a single exercise."""

    BEGINNER = "beginner"
    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def index(self) -> int:
        """Position of this level in LEVEL_ORDER."""
        return LEVEL_ORDER.index(self)

    @property
    def display_name(self) -> str:
        """Capitalized name for user-facing messages."""
        return self.value.capitalize()


class Sex(str, Enum):
    """Biological sex used to scale strength standards."""

    MALE = "male"
    FEMALE = "female"


LEVEL_ORDER: List[Level] = [
    Level.BEGINNER,
    Level.NOVICE,
    Level.INTERMEDIATE,
    Level.ADVANCED,
]


def level_index(level: Optional[Level]) -> int:
    """
    Index of a level in LEVEL_ORDER.

    An unrated exercise (None) sits below every level at -1, so any achieved
    level counts as a promotion from nothing.
    """
    if level is None:
        return -1
    return Level(level).index
