"""
SyncCloud Use Case.

Pushes pending local changes, then pulls the account's cloud snapshot and
merges it: profiles last-write-wins on updated_at, workout records added when
missing locally.
"""

import logging
from dataclasses import dataclass

from application.ports import SyncQueue
from backend.core.profile_service import ProfileService
from backend.core.workout_history import WorkoutHistoryStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of one push/pull round."""

    pushed: bool
    pulled: bool
    pending: int
    workouts_added: int = 0


class SyncCloudUseCase:
    """
    Use case for a full cloud sync round.

    A failed push does not stop the pull; anything left unpushed stays queued
    for the next round.
    """

    def __init__(
        self,
        sync_queue: SyncQueue,
        profiles: ProfileService,
        history: WorkoutHistoryStore,
    ) -> None:
        self._sync_queue = sync_queue
        self._profiles = profiles
        self._history = history

    def execute(self) -> SyncResult:
        pushed = self._sync_queue.push()

        snapshot = self._sync_queue.pull()
        workouts_added = 0
        if snapshot is not None:
            self._profiles.apply_cloud_profiles(snapshot.profiles)
            workouts_added = self._history.merge_cloud_records(snapshot.workouts)

        result = SyncResult(
            pushed=pushed,
            pulled=snapshot is not None,
            pending=len(self._sync_queue.pending()),
            workouts_added=workouts_added,
        )
        logger.info(
            f"Sync round: pushed={result.pushed} pulled={result.pulled} "
            f"pending={result.pending} workouts_added={result.workouts_added}"
        )
        return result
