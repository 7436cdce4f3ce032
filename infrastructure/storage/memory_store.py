"""
In-Memory Document Store.

Implements the DocumentStore protocol with a plain list. Used when no data
directory is configured and as the default store in tests.
"""
import copy
from typing import Any, Dict, List, Optional

from application.ports import ChangeNotifier


class InMemoryDocumentStore:
    """
    In-memory implementation of DocumentStore.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state without going through save_all().
    """

    def __init__(
        self,
        items: Optional[List[Dict[str, Any]]] = None,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._items: List[Dict[str, Any]] = copy.deepcopy(items or [])
        self._notifier = notifier
        self.save_count = 0

    def get_all(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._items)

    def save_all(self, items: List[Dict[str, Any]]) -> None:
        self._items = copy.deepcopy(items)
        self.save_count += 1
        if self._notifier is not None:
            self._notifier.publish()

    def reset(self) -> None:
        """Clear all stored data without notifying."""
        self._items = []
        self.save_count = 0
