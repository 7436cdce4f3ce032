"""
Infrastructure Database Layer.

Supabase-backed implementation of the SyncQueue port defined in
application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseSyncQueue
    from infrastructure.storage import JsonFileDocumentStore

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Pending changes live in a local collection until pushed
    queue = SupabaseSyncQueue(
        client,
        queue_store=JsonFileDocumentStore(data_dir / "sync_queue.json"),
        user_id="user_123",
    )
"""

from infrastructure.db.sync_repository import SupabaseSyncQueue

__all__ = [
    "SupabaseSyncQueue",
]
