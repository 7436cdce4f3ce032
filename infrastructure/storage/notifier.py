"""
Local publish/subscribe change notifier.
"""
import logging
from typing import List

from application.ports import ChangeCallback, Unsubscribe

logger = logging.getLogger(__name__)


class LocalChangeNotifier:
    """
    In-process implementation of ChangeNotifier.

    Callbacks run synchronously in subscription order. A failing callback is
    logged and does not stop delivery to the others.
    """

    def __init__(self, name: str = "documents"):
        self._name = name
        self._callbacks: List[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def publish(self) -> None:
        for callback in list(self._callbacks):
            try:
                callback()
            except Exception:
                logger.exception(f"Change subscriber failed for {self._name}")

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)
