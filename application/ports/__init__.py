"""
Interfaces (Ports) for StrengthProfile.

This package defines abstract interfaces that decouple the strength and
session core from infrastructure (local storage, cloud sync, wall-clock time).
Implementations are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import DocumentStore, ChangeNotifier, Clock

    class ActiveSessionManager:
        def __init__(self, store: DocumentStore, notifier: ChangeNotifier, clock: Clock):
            self._store = store
            ...
"""

# Whole-collection persistence
from application.ports.document_store import DocumentStore

# Change notification
from application.ports.change_notifier import (
    ChangeNotifier,
    ChangeCallback,
    Unsubscribe,
)

# Time source
from application.ports.clock import Clock

# Static exercise catalog
from application.ports.exercise_catalog import ExerciseCatalog

# Cloud sync
from application.ports.sync_queue import (
    SyncQueue,
    SyncItem,
    SyncEntity,
    SyncAction,
    CloudSnapshot,
)

__all__ = [
    # Storage
    "DocumentStore",
    # Notification
    "ChangeNotifier",
    "ChangeCallback",
    "Unsubscribe",
    # Time
    "Clock",
    # Catalog
    "ExerciseCatalog",
    # Sync
    "SyncQueue",
    "SyncItem",
    "SyncEntity",
    "SyncAction",
    "CloudSnapshot",
]
