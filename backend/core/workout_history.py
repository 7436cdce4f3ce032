"""
Workout History Store.

Persisted per-day exercise records, keyed by (profile_id, exercise_id, local
date). The first set logged for an exercise on a day inserts a record; later
saves that day replace its sets in place. Records are never deleted here.

Dates are local calendar dates from the injected clock, not UTC. Two sets
either side of local midnight land in different records; that is expected.
"""
import logging
import uuid
from datetime import date, datetime
from typing import List, Optional, Set

from application.ports import Clock, DocumentStore, SyncQueue
from backend.core.documents import dump_documents, parse_documents
from domain.models import WorkoutRecord, WorkoutSet

logger = logging.getLogger(__name__)


def format_local_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def format_session_date(date_str: str, today: str) -> str:
    """
    Short label for a record date: "TODAY" or e.g. "Dec 5".

    Args:
        date_str: Record date (YYYY-MM-DD)
        today: Today's date (YYYY-MM-DD)
    """
    if date_str == today:
        return "TODAY"
    parsed = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{parsed.strftime('%b')} {parsed.day}"


def create_empty_sets(count: int = 3) -> List[WorkoutSet]:
    """Blank sets for a new exercise card."""
    return [WorkoutSet() for _ in range(count)]


class WorkoutHistoryStore:
    """
    Upsert-by-day store of WorkoutRecords over a DocumentStore.

    Every create/update is also queued for cloud sync when a SyncQueue is
    injected.
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: Clock,
        sync_queue: Optional[SyncQueue] = None,
    ):
        """
        Initialize the history store.

        Args:
            store: Collection of workout record documents
            clock: Local time source (defines "today")
            sync_queue: Optional cloud sync collaborator
        """
        self._store = store
        self._clock = clock
        self._sync_queue = sync_queue

    def today(self) -> str:
        """Today's local date as YYYY-MM-DD."""
        return format_local_date(self._clock.today())

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all(self) -> List[WorkoutRecord]:
        """Every valid stored record, in storage order."""
        return parse_documents(self._store.get_all(), WorkoutRecord)

    def get_profile_exercise_records(
        self,
        profile_id: str,
        exercise_id: str,
    ) -> List[WorkoutRecord]:
        """All records for a profile and exercise, most recent first."""
        records = [
            r for r in self.get_all()
            if r.profile_id == profile_id and r.exercise_id == exercise_id
        ]
        records.sort(key=lambda r: r.date, reverse=True)
        return records

    def get_exercise_sessions(
        self,
        profile_id: str,
        exercise_id: str,
        limit: int = 3,
    ) -> List[WorkoutRecord]:
        """
        The `limit` most recent records for an exercise, newest first.

        Records are counted regardless of the gaps between them, so the
        window can span weeks for a rarely trained exercise.
        """
        return self.get_profile_exercise_records(profile_id, exercise_id)[:limit]

    def get_today_session(
        self,
        profile_id: str,
        exercise_id: str,
    ) -> Optional[WorkoutRecord]:
        """Today's record for an exercise, if any."""
        today = self.today()
        return next(
            (
                r for r in self.get_all()
                if r.profile_id == profile_id
                and r.exercise_id == exercise_id
                and r.date == today
            ),
            None,
        )

    def get_exercise_pr(self, profile_id: str, exercise_id: str) -> float:
        """Heaviest complete set ever logged for an exercise (0 if none)."""
        records = self.get_profile_exercise_records(profile_id, exercise_id)
        return max((r.max_weight for r in records), default=0.0)

    def get_exercises_with_history(self, profile_id: str) -> Set[str]:
        """Exercise ids with at least one weighted set for this profile."""
        return {
            r.exercise_id
            for r in self.get_all()
            if r.profile_id == profile_id and r.has_weight
        }

    def get_workout_dates(self, profile_id: str) -> List[str]:
        """Distinct dates the profile trained on, newest first."""
        dates = {r.date for r in self.get_all() if r.profile_id == profile_id}
        return sorted(dates, reverse=True)

    def get_records_for_date(
        self,
        profile_id: str,
        date_str: str,
    ) -> List[WorkoutRecord]:
        """All of a profile's records on one date."""
        return [
            r for r in self.get_all()
            if r.profile_id == profile_id and r.date == date_str
        ]

    # =========================================================================
    # Writes
    # =========================================================================

    def save_session(
        self,
        profile_id: str,
        exercise_id: str,
        sets: List[WorkoutSet],
        completed_sets: Optional[List[int]] = None,
    ) -> WorkoutRecord:
        """
        Insert or update today's record for an exercise.

        An existing record keeps its id, and keeps its completed_sets when
        none are supplied.

        Returns:
            The saved record
        """
        records = self.get_all()
        today = self.today()

        existing_index = next(
            (
                i for i, r in enumerate(records)
                if r.profile_id == profile_id
                and r.exercise_id == exercise_id
                and r.date == today
            ),
            None,
        )
        is_update = existing_index is not None

        if is_update:
            existing = records[existing_index]
            record = WorkoutRecord(
                id=existing.id,
                date=today,
                profile_id=profile_id,
                exercise_id=exercise_id,
                sets=list(sets),
                completed_sets=(
                    completed_sets if completed_sets is not None
                    else existing.completed_sets
                ),
            )
            records[existing_index] = record
        else:
            record = WorkoutRecord(
                id=str(uuid.uuid4()),
                date=today,
                profile_id=profile_id,
                exercise_id=exercise_id,
                sets=list(sets),
                completed_sets=completed_sets,
            )
            records.append(record)

        self._store.save_all(dump_documents(records))

        operation = "update" if is_update else "create"
        logger.debug(f"Workout record {operation}: {exercise_id} on {today}")

        if self._sync_queue is not None:
            self._sync_queue.enqueue("workout", operation, record.model_dump(mode="json"))

        return record

    def replace_all(self, records: List[WorkoutRecord]) -> None:
        """Overwrite the whole history."""
        self._store.save_all(dump_documents(records))

    def merge_cloud_records(self, cloud_items: List[dict]) -> int:
        """
        Add records pulled from the cloud that are missing locally.

        Workout records carry no update time, so a record present on both
        sides keeps its local copy.

        Returns:
            Number of records added
        """
        records = self.get_all()
        known_ids = {r.id for r in records}
        added = [
            r for r in parse_documents(cloud_items, WorkoutRecord)
            if r.id not in known_ids
        ]
        if added:
            self.replace_all(records + added)
        return len(added)
