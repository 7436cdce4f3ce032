"""
Fake Sync Queue for Testing.

In-memory implementation of SyncQueue. Records everything enqueued and
serves a seeded cloud snapshot.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from application.ports import CloudSnapshot, SyncItem


class FakeSyncQueue:
    """
    In-memory fake implementation of SyncQueue.

    `online=False` makes push() keep items and pull() return None.
    """

    def __init__(self, online: bool = True):
        self.online = online
        self._pending: List[SyncItem] = []
        self.pushed: List[SyncItem] = []
        self._snapshot = CloudSnapshot()

    def reset(self) -> None:
        """Clear all stored data."""
        self._pending.clear()
        self.pushed.clear()
        self._snapshot = CloudSnapshot()

    def seed_snapshot(
        self,
        profiles: Optional[List[Dict[str, Any]]] = None,
        workouts: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """Set what pull() returns."""
        self._snapshot = CloudSnapshot(
            profiles=list(profiles or []),
            workouts=list(workouts or []),
        )

    def enqueue(self, entity, action, record: Dict[str, Any]) -> None:
        self._pending.append(
            SyncItem(
                entity=entity,
                action=action,
                record=record,
                queued_at=datetime.now(timezone.utc).isoformat(),
            )
        )

    def pending(self) -> List[SyncItem]:
        return list(self._pending)

    def push(self) -> bool:
        if not self.online:
            return False
        self.pushed.extend(self._pending)
        self._pending.clear()
        return True

    def pull(self) -> Optional[CloudSnapshot]:
        if not self.online:
            return None
        return self._snapshot

    def actions(self) -> List[tuple]:
        """(entity, action) of every pending item, oldest first."""
        return [(item.entity, item.action) for item in self._pending]
