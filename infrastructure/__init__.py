"""
Infrastructure Layer for StrengthProfile.

This package contains concrete implementations of the ports in
application.ports:
- storage/: JSON-file and in-memory document stores, change notifier, clock,
  offline sync queue
- db/: Supabase cloud sync
"""

from infrastructure.storage import (
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    LocalChangeNotifier,
    LocalSyncQueue,
    SystemClock,
)
from infrastructure.db import SupabaseSyncQueue

__all__ = [
    # Local storage
    "JsonFileDocumentStore",
    "InMemoryDocumentStore",
    "LocalChangeNotifier",
    "SystemClock",
    "LocalSyncQueue",
    # Cloud sync
    "SupabaseSyncQueue",
]
