"""
Rest timer settings and per-exercise duration history.

Settings are a one-document collection; history is one document per
exercise. A settings document with bad or missing fields falls back to
defaults field by field.
"""
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from application.ports import DocumentStore
from backend.core.documents import dump_documents, parse_documents
from domain.models import ExerciseTimerHistory, TimerSettings
from domain.models.timer import format_time

logger = logging.getLogger(__name__)

__all__ = ["TimerSettingsStore", "format_time"]


class TimerSettingsStore:
    """Read/write rest timer preferences."""

    def __init__(self, settings_store: DocumentStore, history_store: DocumentStore):
        """
        Args:
            settings_store: Collection holding zero or one settings document
            history_store: Collection of ExerciseTimerHistory documents
        """
        self._settings_store = settings_store
        self._history_store = history_store

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def get_timer_settings(self) -> TimerSettings:
        """Stored settings over the defaults."""
        items = self._settings_store.get_all()
        if not items or not isinstance(items[0], dict):
            return TimerSettings()
        return self._merge(TimerSettings(), items[0])

    def save_timer_settings(self, changes: Dict[str, Any]) -> TimerSettings:
        """
        Apply a partial update and persist the result.

        Raises:
            ValidationError: A supplied value is out of range
        """
        current = self.get_timer_settings()
        updated = TimerSettings.model_validate({**current.model_dump(), **changes})
        self._settings_store.save_all([updated.model_dump(mode="json")])
        return updated

    def reset_timer_settings(self) -> TimerSettings:
        self._settings_store.save_all([])
        return TimerSettings()

    # -------------------------------------------------------------------------
    # Per-exercise history
    # -------------------------------------------------------------------------

    def get_exercise_timer_duration(self, exercise_id: str) -> int:
        """Last rest duration used for an exercise, else the default."""
        entry = next(
            (h for h in self._history() if h.exercise_id == exercise_id),
            None,
        )
        if entry is not None:
            return entry.last_duration
        return self.get_timer_settings().default_duration

    def save_exercise_timer_duration(self, exercise_id: str, duration: int) -> None:
        history = self._history()
        entry = ExerciseTimerHistory(exercise_id=exercise_id, last_duration=duration)

        for i, existing in enumerate(history):
            if existing.exercise_id == exercise_id:
                history[i] = entry
                break
        else:
            history.append(entry)

        self._history_store.save_all(dump_documents(history))

    def reset_timer_history(self) -> None:
        self._history_store.save_all([])

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _history(self) -> List[ExerciseTimerHistory]:
        return parse_documents(self._history_store.get_all(), ExerciseTimerHistory)

    @staticmethod
    def _merge(defaults: TimerSettings, stored: Dict[str, Any]) -> TimerSettings:
        merged = defaults
        for key, value in stored.items():
            if key not in TimerSettings.model_fields:
                continue
            try:
                merged = TimerSettings.model_validate({**merged.model_dump(), key: value})
            except ValidationError:
                logger.warning(f"Ignoring invalid stored timer setting {key!r}")
        return merged
