"""
Cloud Sync Interface (Port).

Local writes of profiles and workouts are queued for eventual push to the
cloud backend. Pulling returns a full remote snapshot which callers merge
last-write-wins.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Protocol


SyncEntity = Literal["profile", "workout"]
SyncAction = Literal["create", "update", "delete"]


@dataclass
class SyncItem:
    """A single pending change waiting to be pushed."""
    entity: SyncEntity
    action: SyncAction
    record: Dict[str, Any]
    queued_at: str  # ISO format


@dataclass
class CloudSnapshot:
    """Full remote state for the signed-in account."""
    profiles: List[Dict[str, Any]] = field(default_factory=list)
    workouts: List[Dict[str, Any]] = field(default_factory=list)


class SyncQueue(Protocol):
    """
    Abstract interface for the cloud sync collaborator.

    Enqueueing never fails from the caller's point of view; network problems
    surface only as a False/None result from push/pull.
    """

    def enqueue(
        self,
        entity: SyncEntity,
        action: SyncAction,
        record: Dict[str, Any],
    ) -> None:
        """
        Queue a full record for eventual push.

        Args:
            entity: "profile" or "workout"
            action: "create", "update" or "delete"
            record: The full record (or {"id": ...} for deletes)
        """
        ...

    def pending(self) -> List[SyncItem]:
        """Items queued but not yet pushed, oldest first."""
        ...

    def push(self) -> bool:
        """
        Push all pending items to the cloud.

        Returns:
            True if the queue was fully drained
        """
        ...

    def pull(self) -> Optional[CloudSnapshot]:
        """
        Fetch the full remote snapshot.

        Returns:
            CloudSnapshot, or None if sync is unavailable or failed
        """
        ...
