"""
Static exercise catalog.

Loaded once at import from shared/dictionaries/exercises.yaml and validated
into immutable Exercise models.
"""
import pathlib
from typing import Dict, List, Optional

import yaml

from domain.models import BodyPart, Exercise

ROOT = pathlib.Path(__file__).resolve().parents[2]

CATALOG_PATH = ROOT / "shared/dictionaries/exercises.yaml"


def load_exercises(path: pathlib.Path = CATALOG_PATH) -> List[Exercise]:
    """Parse and validate the catalog file."""
    raw = yaml.safe_load(path.read_text()) or []
    return [Exercise.model_validate(item) for item in raw]


EXERCISES: List[Exercise] = load_exercises()


class StaticExerciseCatalog:
    """
    In-memory implementation of ExerciseCatalog.

    Defaults to the bundled catalog; tests may pass their own list.
    """

    def __init__(self, exercises: Optional[List[Exercise]] = None):
        self._exercises = list(EXERCISES if exercises is None else exercises)
        self._by_id: Dict[str, Exercise] = {e.id: e for e in self._exercises}

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return self._by_id.get(exercise_id)

    def get_all(self) -> List[Exercise]:
        return list(self._exercises)

    def get_by_body_part(self, body_part: BodyPart) -> List[Exercise]:
        return [e for e in self._exercises if e.body_part == body_part]


def get_exercise_by_id(exercise_id: str) -> Optional[Exercise]:
    """Look up a bundled catalog exercise."""
    return next((e for e in EXERCISES if e.id == exercise_id), None)
