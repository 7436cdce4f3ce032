"""
Local (offline) sync queue.

Keeps pending profile/workout changes in a DocumentStore so they survive a
restart. Without a cloud backend nothing is ever pushed or pulled.

The queue holds at most one entry per (entity, record id): a newer change to
the same record replaces the pending one, so repeated saves of today's
workout do not pile up while offline.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from application.ports import CloudSnapshot, DocumentStore, SyncAction, SyncEntity, SyncItem

logger = logging.getLogger(__name__)


def coalesce(
    items: List[Dict[str, Any]],
    entity: SyncEntity,
    action: SyncAction,
    record: Dict[str, Any],
    queued_at: str,
) -> List[Dict[str, Any]]:
    """
    Fold a new change into the pending entries.

    - create then update: stays a create, with the newer record
    - create then delete: both dropped, the cloud never saw the record
    - anything else: the newer change replaces the pending one
    """
    entry = {"entity": entity, "action": action, "record": record, "queued_at": queued_at}
    record_id = record.get("id")

    for index, item in enumerate(items):
        if item.get("entity") != entity or _record_id(item) != record_id:
            continue

        previous = item.get("action")
        if previous == "create" and action == "delete":
            return items[:index] + items[index + 1:]
        if previous == "create" and action == "update":
            entry["action"] = "create"
        return items[:index] + [entry] + items[index + 1:]

    return items + [entry]


def _record_id(item: Dict[str, Any]) -> Optional[str]:
    record = item.get("record")
    return record.get("id") if isinstance(record, dict) else None


class LocalSyncQueue:
    """SyncQueue that only records pending changes."""

    def __init__(self, queue_store: DocumentStore):
        self._queue_store = queue_store

    def enqueue(
        self,
        entity: SyncEntity,
        action: SyncAction,
        record: Dict[str, Any],
    ) -> None:
        items = coalesce(
            self._queue_store.get_all(),
            entity,
            action,
            record,
            datetime.now(timezone.utc).isoformat(),
        )
        self._queue_store.save_all(items)

    def pending(self) -> List[SyncItem]:
        pending = []
        for item in self._queue_store.get_all():
            try:
                pending.append(
                    SyncItem(
                        entity=item["entity"],
                        action=item["action"],
                        record=item["record"],
                        queued_at=item["queued_at"],
                    )
                )
            except (KeyError, TypeError):
                logger.warning("Dropping malformed sync queue entry")
        return pending

    def push(self) -> bool:
        return False

    def pull(self) -> Optional[CloudSnapshot]:
        return None

    def _replace_pending(self, items: List[SyncItem]) -> None:
        self._queue_store.save_all(
            [
                {
                    "entity": i.entity,
                    "action": i.action,
                    "record": i.record,
                    "queued_at": i.queued_at,
                }
                for i in items
            ]
        )
