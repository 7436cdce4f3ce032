"""
Document Store Interface (Port).

Every persisted collection (profiles, workouts, the active session, timer
settings, the sync queue) is a list of JSON-compatible dicts read and written
as a whole. The core never does partial or indexed writes: it reads
everything, mutates in memory, and writes everything back.
"""
from typing import Any, Dict, List, Protocol


class DocumentStore(Protocol):
    """
    Abstract interface for a whole-collection document store.

    Implementations must treat unreadable or corrupt stored data as an empty
    collection rather than raising.
    """

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Read the whole collection.

        Returns:
            List of stored documents (empty if nothing is stored or the stored
            data cannot be parsed)
        """
        ...

    def save_all(self, items: List[Dict[str, Any]]) -> None:
        """
        Replace the whole collection.

        Args:
            items: Documents to store; an empty list clears the collection
        """
        ...
