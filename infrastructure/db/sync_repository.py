"""
Supabase Sync Queue Implementation.

Pushes queued profile/workout changes to the `profiles` and `workouts`
tables and pulls the account's full snapshot back. Records are stored as a
JSONB `data` column alongside their id, owner and update time, so the cloud
schema does not need to track every model field.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.ports import CloudSnapshot, DocumentStore, SyncItem
from infrastructure.storage.sync_queue import LocalSyncQueue

logger = logging.getLogger(__name__)

TABLES = {
    "profile": "profiles",
    "workout": "workouts",
}


class SupabaseSyncQueue(LocalSyncQueue):
    """
    SyncQueue backed by Supabase.

    Failures never propagate: an item that cannot be pushed stays queued
    (along with everything after it, to keep ordering) and push() returns
    False; a failed pull returns None.
    """

    def __init__(self, client: Client, queue_store: DocumentStore, user_id: str):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
            queue_store: Local collection holding pending items
            user_id: Account the records belong to
        """
        super().__init__(queue_store)
        self._client = client
        self._user_id = user_id

    def push(self) -> bool:
        items = self.pending()
        if not items:
            return True

        for index, item in enumerate(items):
            try:
                self._push_item(item)
            except Exception as e:
                logger.error(f"Sync push failed for {item.entity} {item.action}: {e}")
                self._replace_pending(items[index:])
                return False

        self._replace_pending([])
        logger.info(f"Pushed {len(items)} change(s) to cloud")
        return True

    def pull(self) -> Optional[CloudSnapshot]:
        try:
            profiles = self._fetch(TABLES["profile"])
            workouts = self._fetch(TABLES["workout"])
        except Exception as e:
            logger.error(f"Sync pull failed: {e}")
            return None
        return CloudSnapshot(profiles=profiles, workouts=workouts)

    def _push_item(self, item: SyncItem) -> None:
        table = self._client.table(TABLES[item.entity])
        record_id = item.record.get("id")

        if item.action == "delete":
            table.delete().eq("id", record_id).eq("user_id", self._user_id).execute()
            return

        table.upsert(
            {
                "id": record_id,
                "user_id": self._user_id,
                "data": item.record,
                "updated_at": item.record.get("updated_at", item.queued_at),
            }
        ).execute()

    def _fetch(self, table_name: str) -> List[Dict[str, Any]]:
        result = self._client.table(table_name) \
            .select("id, data") \
            .eq("user_id", self._user_id) \
            .execute()
        return [row["data"] for row in result.data or [] if row.get("data")]
