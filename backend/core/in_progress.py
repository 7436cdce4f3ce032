"""
In-progress exercise tracker.

Remembers which exercise the lifter has open on the logging screen so other
views can mark it. The marker only lives for the day it was set; reading it
on a later day clears it.
"""
from typing import Optional

from application.ports import ChangeCallback, ChangeNotifier, Clock, DocumentStore, Unsubscribe
from backend.core.documents import parse_document
from domain.models import InProgressExercise


class InProgressExerciseTracker:
    """One-document store of the exercise currently being logged."""

    def __init__(self, store: DocumentStore, notifier: ChangeNotifier, clock: Clock):
        """
        Args:
            store: Collection holding zero or one marker. The store publishes
                on `notifier` when it is written.
            notifier: Change channel observers subscribe to
            clock: Local time source for the day scope
        """
        self._store = store
        self._notifier = notifier
        self._clock = clock

    def get(self) -> Optional[str]:
        """Exercise id in progress today, or None."""
        items = self._store.get_all()
        if not items:
            return None

        marker = parse_document(items[0], InProgressExercise)
        if marker is None or marker.date != self._clock.today():
            self.clear()
            return None
        return marker.exercise_id

    def set(self, exercise_id: str) -> None:
        marker = InProgressExercise(exercise_id=exercise_id, date=self._clock.today())
        self._store.save_all([marker.model_dump(mode="json")])

    def clear(self) -> None:
        self._store.save_all([])

    def is_in_progress(self, exercise_id: str) -> bool:
        return self.get() == exercise_id

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        """Be told (with no payload) whenever the marker changes."""
        return self._notifier.subscribe(callback)
