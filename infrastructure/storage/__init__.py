"""
Local storage adapters.

- JsonFileDocumentStore: one JSON file per collection (on-device persistence)
- InMemoryDocumentStore: list-backed store for tests and ephemeral runs
- LocalChangeNotifier: in-process publish/subscribe
- SystemClock: wall-clock time source
- LocalSyncQueue: pending cloud changes, kept while offline
"""

from infrastructure.storage.json_file_store import JsonFileDocumentStore
from infrastructure.storage.memory_store import InMemoryDocumentStore
from infrastructure.storage.notifier import LocalChangeNotifier
from infrastructure.storage.clock import SystemClock
from infrastructure.storage.sync_queue import LocalSyncQueue

__all__ = [
    "JsonFileDocumentStore",
    "InMemoryDocumentStore",
    "LocalChangeNotifier",
    "SystemClock",
    "LocalSyncQueue",
]
