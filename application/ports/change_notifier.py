"""
Change Notification Interface (Port).

Observers are told *that* a document changed, never *what* changed; they
re-read the store. Delivery covers both same-process writers and writes made
by another process sharing the same storage.
"""
from typing import Callable, Protocol


ChangeCallback = Callable[[], None]
Unsubscribe = Callable[[], None]


class ChangeNotifier(Protocol):
    """Publish/subscribe channel for a single document collection."""

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        """
        Register a zero-argument callback.

        Args:
            callback: Called after every change

        Returns:
            Function that removes the subscription when called
        """
        ...

    def publish(self) -> None:
        """Notify all current subscribers that the collection changed."""
        ...
