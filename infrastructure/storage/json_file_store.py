"""
JSON File Document Store.

Implements the DocumentStore protocol on top of a single JSON file per
collection. This is the local, on-device persistence for profiles, workouts
and the active session.
"""
import json
import logging
import os
import pathlib
import tempfile
from typing import Any, Dict, List, Optional

from application.ports import ChangeNotifier

logger = logging.getLogger(__name__)


class JsonFileDocumentStore:
    """
    File-backed implementation of DocumentStore.

    The file holds a JSON array. A missing file is an empty collection; an
    unreadable or malformed file is logged and also treated as empty, so a
    corrupt local store never crashes the app.

    Writes go to a temporary file that replaces the target in one step, then
    the injected notifier is published. Writes from other processes are
    picked up by `poll_external_change()`, which every read runs first.
    """

    def __init__(
        self,
        path: pathlib.Path,
        notifier: Optional[ChangeNotifier] = None,
    ):
        """
        Initialize the store.

        Args:
            path: Location of the JSON file (parent dirs are created on write)
            notifier: Optional notifier published after every write
        """
        self._path = pathlib.Path(path)
        self._notifier = notifier
        self._last_seen_mtime = self._current_mtime()

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def get_all(self) -> List[Dict[str, Any]]:
        """Read the whole collection, first publishing any external change."""
        self.poll_external_change()
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not read {self._path}: {e}")
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring corrupt document store {self._path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(
                f"Ignoring document store {self._path}: expected a JSON array, "
                f"got {type(data).__name__}"
            )
            return []

        return [item for item in data if isinstance(item, dict)]

    def save_all(self, items: List[Dict[str, Any]]) -> None:
        """Replace the whole collection."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, default=str)
            os.replace(tmp_name, self._path)
        except BaseException:
            pathlib.Path(tmp_name).unlink(missing_ok=True)
            raise

        self._last_seen_mtime = self._current_mtime()
        if self._notifier is not None:
            self._notifier.publish()

    def poll_external_change(self) -> bool:
        """
        Detect a write made by another process since our last read or write.

        Publishes on the notifier when a change is seen.

        Returns:
            True if the file changed outside this store
        """
        mtime = self._current_mtime()
        if mtime == self._last_seen_mtime:
            return False

        self._last_seen_mtime = mtime
        logger.debug(f"External change detected in {self._path}")
        if self._notifier is not None:
            self._notifier.publish()
        return True

    def _current_mtime(self) -> Optional[int]:
        try:
            return self._path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
