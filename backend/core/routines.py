"""
Workout routines.

Predefined routines are loaded once from shared/dictionaries/routines.yaml.
Custom routines, the selected routine and each routine's tracked exercises
live in their own DocumentStore collections.

Today's workout rotates through the selected routine's days, one day per
calendar day since the routine was selected.
"""
import logging
import pathlib
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from application.ports import Clock, DocumentStore, ExerciseCatalog
from backend.core.documents import dump_documents, parse_document, parse_documents
from domain.models import (
    RoutineExercises,
    RoutineSelection,
    WorkoutDay,
    WorkoutRoutine,
)

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]

ROUTINES_PATH = ROOT / "shared/dictionaries/routines.yaml"

# Fields a caller may never set on a custom routine
READ_ONLY_FIELDS = ("id", "is_custom", "created_at")


def load_routines(path: pathlib.Path = ROUTINES_PATH):
    """Parse the bundled routines file into (routines, default exercise ids)."""
    raw = yaml.safe_load(path.read_text()) or {}
    routines = [WorkoutRoutine.model_validate(item) for item in raw.get("routines", [])]
    return routines, list(raw.get("default_selected_exercises", []))


PREDEFINED_ROUTINES, DEFAULT_SELECTED_EXERCISES = load_routines()


class RoutineValidationError(Exception):
    """Raised when custom routine fields are missing or invalid."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class RoutineNotFoundError(Exception):
    """Raised when a routine id does not exist."""

    def __init__(self, routine_id: str):
        super().__init__(f"Routine not found: {routine_id}")
        self.routine_id = routine_id


class RoutineStore:
    """
    Predefined and custom routines, plus the lifter's selection.

    Usage:
        >>> routines = RoutineStore(custom, selection, tracked, catalog, clock)
        >>> routine = routines.select_routine("ppl")
        >>> routines.get_todays_workout().name
        'Push A'
    """

    def __init__(
        self,
        custom_store: DocumentStore,
        selection_store: DocumentStore,
        exercises_store: DocumentStore,
        catalog: ExerciseCatalog,
        clock: Clock,
        predefined: Optional[List[WorkoutRoutine]] = None,
    ):
        """
        Args:
            custom_store: Collection of custom WorkoutRoutine documents
            selection_store: Collection holding zero or one RoutineSelection
            exercises_store: Collection of RoutineExercises documents
            catalog: Used to reject unknown exercise ids in custom routines
            clock: Local time source for ids and day rotation
            predefined: Bundled routines (the shipped file if not given)
        """
        self._custom_store = custom_store
        self._selection_store = selection_store
        self._exercises_store = exercises_store
        self._catalog = catalog
        self._clock = clock
        self._predefined = list(PREDEFINED_ROUTINES if predefined is None else predefined)

    # =========================================================================
    # Routines
    # =========================================================================

    def get_all_routines(self) -> List[WorkoutRoutine]:
        """Predefined routines first, then custom ones in creation order."""
        return self._predefined + self.get_custom_routines()

    def get_custom_routines(self) -> List[WorkoutRoutine]:
        return parse_documents(self._custom_store.get_all(), WorkoutRoutine)

    def get_routine(self, routine_id: str) -> Optional[WorkoutRoutine]:
        return next((r for r in self.get_all_routines() if r.id == routine_id), None)

    def add_custom_routine(self, data: Dict[str, Any]) -> WorkoutRoutine:
        """
        Create a custom routine.

        Raises:
            RoutineValidationError: Missing fields, bad values or exercise ids
                not in the catalog
        """
        fields = {k: v for k, v in data.items() if k not in READ_ONLY_FIELDS}
        now = self._clock.now()
        routine = self._validated(
            {
                **fields,
                "id": self._new_id(),
                "is_custom": True,
                "created_at": now,
            }
        )

        routines = self.get_custom_routines()
        routines.append(routine)
        self._custom_store.save_all(dump_documents(routines))

        logger.info(f"Created custom routine {routine.id}")
        return routine

    def update_custom_routine(
        self,
        routine_id: str,
        changes: Dict[str, Any],
    ) -> Optional[WorkoutRoutine]:
        """
        Apply a partial update to a custom routine.

        Predefined routines cannot be changed.

        Returns:
            The updated routine, or None if no custom routine has this id

        Raises:
            RoutineValidationError: An updated value is invalid
        """
        routines = self.get_custom_routines()
        index = next((i for i, r in enumerate(routines) if r.id == routine_id), None)
        if index is None:
            return None

        allowed = {k: v for k, v in changes.items() if k not in READ_ONLY_FIELDS}
        updated = self._validated({**routines[index].model_dump(), **allowed})
        routines[index] = updated
        self._custom_store.save_all(dump_documents(routines))
        return updated

    def delete_custom_routine(self, routine_id: str) -> bool:
        """
        Delete a custom routine along with its tracked exercises.

        Clears the selection if it pointed at this routine.

        Returns:
            True if a routine was removed
        """
        routines = self.get_custom_routines()
        remaining = [r for r in routines if r.id != routine_id]
        if len(remaining) == len(routines):
            return False

        self._custom_store.save_all(dump_documents(remaining))
        self._save_tracked(
            [t for t in self._tracked() if t.routine_id != routine_id]
        )

        if self.get_selected_routine_id() == routine_id:
            self.clear_selected_routine()

        logger.info(f"Deleted custom routine {routine_id}")
        return True

    # =========================================================================
    # Selection
    # =========================================================================

    def get_selected_routine_id(self) -> Optional[str]:
        selection = self._selection()
        return selection.routine_id if selection else None

    def get_selected_routine(self) -> Optional[WorkoutRoutine]:
        routine_id = self.get_selected_routine_id()
        if routine_id is None:
            return None
        return self.get_routine(routine_id)

    def select_routine(self, routine_id: str) -> WorkoutRoutine:
        """
        Follow a routine starting today.

        Day rotation restarts at the routine's first day. The routine's
        tracked exercises are seeded from the defaults the first time.

        Raises:
            RoutineNotFoundError: No routine with this id
        """
        routine = self.get_routine(routine_id)
        if routine is None:
            raise RoutineNotFoundError(routine_id)

        selection = RoutineSelection(routine_id=routine_id, selected_on=self._clock.today())
        self._selection_store.save_all([selection.model_dump(mode="json")])
        self.initialize_routine_exercises(routine)
        return routine

    def clear_selected_routine(self) -> None:
        self._selection_store.save_all([])

    def get_todays_workout(self) -> Optional[WorkoutDay]:
        """The selected routine's day for today, or None if none is selected."""
        selection = self._selection()
        if selection is None:
            return None

        routine = self.get_routine(selection.routine_id)
        if routine is None:
            return None

        days_since_start = max((self._clock.today() - selection.selected_on).days, 0)
        return routine.days[days_since_start % len(routine.days)]

    # =========================================================================
    # Tracked exercises
    # =========================================================================

    def get_routine_exercises(self, routine_id: str) -> List[str]:
        entry = next((t for t in self._tracked() if t.routine_id == routine_id), None)
        return list(entry.exercises) if entry else []

    def set_routine_exercises(self, routine_id: str, exercises: List[str]) -> None:
        tracked = [t for t in self._tracked() if t.routine_id != routine_id]
        tracked.append(RoutineExercises(routine_id=routine_id, exercises=list(exercises)))
        self._save_tracked(tracked)

    def toggle_routine_exercise(self, routine_id: str, exercise_id: str) -> List[str]:
        """Add the exercise if untracked, else remove it. Returns the new list."""
        current = self.get_routine_exercises(routine_id)
        if exercise_id in current:
            current.remove(exercise_id)
        else:
            current.append(exercise_id)

        self.set_routine_exercises(routine_id, current)
        return current

    def get_selected_exercises(self) -> List[str]:
        """Tracked exercises of the selected routine."""
        routine_id = self.get_selected_routine_id()
        if routine_id is None:
            return []
        return self.get_routine_exercises(routine_id)

    def is_exercise_selected(self, exercise_id: str) -> bool:
        return exercise_id in self.get_selected_exercises()

    def initialize_routine_exercises(self, routine: WorkoutRoutine) -> List[str]:
        """
        Seed a routine's tracked exercises with the defaults it contains.

        Leaves an existing non-empty selection untouched.
        """
        existing = self.get_routine_exercises(routine.id)
        if existing:
            return existing

        in_routine = set(routine.exercise_ids)
        defaults = [e for e in DEFAULT_SELECTED_EXERCISES if e in in_routine]
        self.set_routine_exercises(routine.id, defaults)
        return defaults

    # =========================================================================
    # Internals
    # =========================================================================

    def _validated(self, data: Dict[str, Any]) -> WorkoutRoutine:
        try:
            routine = WorkoutRoutine.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise RoutineValidationError("Invalid routine", errors) from e

        unknown = [
            e for e in routine.exercise_ids if self._catalog.get_by_id(e) is None
        ]
        if unknown:
            raise RoutineValidationError(
                "Invalid routine",
                [f"Unknown exercise: {e}" for e in unknown],
            )
        return routine

    def _new_id(self) -> str:
        base = int(self._clock.now().timestamp() * 1000)
        taken = {r.id for r in self.get_custom_routines()}
        while f"custom-{base}" in taken:
            base += 1
        return f"custom-{base}"

    def _selection(self) -> Optional[RoutineSelection]:
        items = self._selection_store.get_all()
        if not items:
            return None
        return parse_document(items[0], RoutineSelection)

    def _tracked(self) -> List[RoutineExercises]:
        return parse_documents(self._exercises_store.get_all(), RoutineExercises)

    def _save_tracked(self, tracked: List[RoutineExercises]) -> None:
        self._exercises_store.save_all(dump_documents(tracked))
