"""
Exercise Catalog Interface (Port).

Static, read-only, in-memory table of exercises and their strength standards.
"""
from typing import List, Optional, Protocol

from domain.models import BodyPart, Exercise


class ExerciseCatalog(Protocol):
    """
    Abstract interface for looking up catalog exercises.

    Unknown ids return None; callers treat that as "nothing to compute".
    """

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """
        Get an exercise by its id.

        Args:
            exercise_id: The exercise id (e.g., "bench-press")

        Returns:
            Exercise or None if not in the catalog
        """
        ...

    def get_all(self) -> List[Exercise]:
        """All catalog exercises in catalog order."""
        ...

    def get_by_body_part(self, body_part: BodyPart) -> List[Exercise]:
        """Exercises that train the given body part."""
        ...
