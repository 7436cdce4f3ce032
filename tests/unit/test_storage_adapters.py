"""
Unit tests for infrastructure/storage adapters.

Tests cover:
- JsonFileDocumentStore: round trip, missing/corrupt files, external changes
- InMemoryDocumentStore: copy isolation, notification
- LocalChangeNotifier
- LocalSyncQueue
- SystemClock
"""
import json
import os

import pytest

from infrastructure.storage import (
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    LocalChangeNotifier,
    LocalSyncQueue,
    SystemClock,
)
from tests.fakes import CallRecorder


@pytest.mark.unit
class TestJsonFileDocumentStore:
    """Tests for the JSON file store."""

    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "data" / "workouts.json"

    def test_missing_file_is_empty(self, path):
        assert JsonFileDocumentStore(path).get_all() == []

    def test_round_trip_creates_parent_dirs(self, path):
        store = JsonFileDocumentStore(path)
        store.save_all([{"id": "a"}, {"id": "b"}])

        assert path.exists()
        assert store.get_all() == [{"id": "a"}, {"id": "b"}]
        assert json.loads(path.read_text()) == [{"id": "a"}, {"id": "b"}]

    def test_no_temp_files_left_behind(self, path):
        store = JsonFileDocumentStore(path)
        store.save_all([{"id": "a"}])
        assert [p.name for p in path.parent.iterdir()] == ["workouts.json"]

    @pytest.mark.parametrize("content", ["{not json", "", "   ", '{"id": "a"}'])
    def test_unusable_file_is_empty(self, path, content):
        path.parent.mkdir(parents=True)
        path.write_text(content)
        assert JsonFileDocumentStore(path).get_all() == []

    def test_non_object_entries_dropped(self, path):
        path.parent.mkdir(parents=True)
        path.write_text('[{"id": "a"}, 3, "x", null]')
        assert JsonFileDocumentStore(path).get_all() == [{"id": "a"}]

    def test_write_publishes(self, path):
        notifier = LocalChangeNotifier()
        recorder = CallRecorder()
        notifier.subscribe(recorder)

        JsonFileDocumentStore(path, notifier).save_all([{"id": "a"}])
        assert recorder.calls == 1

    def test_own_write_is_not_external_change(self, path):
        store = JsonFileDocumentStore(path)
        store.save_all([{"id": "a"}])
        assert store.poll_external_change() is False

    def test_other_process_write_detected(self, path):
        """A second store on the same file stands in for another process."""
        notifier = LocalChangeNotifier()
        recorder = CallRecorder()
        notifier.subscribe(recorder)

        watcher = JsonFileDocumentStore(path, notifier)
        writer = JsonFileDocumentStore(path)
        writer.save_all([{"id": "from-elsewhere"}])
        # Some filesystems have coarse mtimes; force a distinct one
        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        assert watcher.get_all() == [{"id": "from-elsewhere"}]
        assert recorder.calls == 1
        assert watcher.poll_external_change() is False


@pytest.mark.unit
class TestInMemoryDocumentStore:
    """Tests for the in-memory store."""

    def test_seeded_items(self):
        assert InMemoryDocumentStore([{"id": "a"}]).get_all() == [{"id": "a"}]

    def test_returned_documents_are_copies(self):
        store = InMemoryDocumentStore()
        items = [{"id": "a", "sets": []}]
        store.save_all(items)

        items[0]["sets"].append(1)
        store.get_all()[0]["sets"].append(2)

        assert store.get_all() == [{"id": "a", "sets": []}]

    def test_save_count_and_reset(self):
        store = InMemoryDocumentStore()
        store.save_all([{"id": "a"}])
        store.save_all([{"id": "b"}])
        assert store.save_count == 2

        store.reset()
        assert store.get_all() == []
        assert store.save_count == 0

    def test_publishes_on_save(self):
        notifier = LocalChangeNotifier()
        recorder = CallRecorder()
        notifier.subscribe(recorder)

        InMemoryDocumentStore(notifier=notifier).save_all([])
        assert recorder.calls == 1


@pytest.mark.unit
class TestLocalChangeNotifier:
    def test_callbacks_run_in_order(self):
        notifier = LocalChangeNotifier()
        order = []
        notifier.subscribe(lambda: order.append("first"))
        notifier.subscribe(lambda: order.append("second"))

        notifier.publish()
        assert order == ["first", "second"]

    def test_unsubscribe_twice_is_harmless(self):
        notifier = LocalChangeNotifier()
        unsubscribe = notifier.subscribe(CallRecorder())
        unsubscribe()
        unsubscribe()
        assert notifier.subscriber_count == 0

    def test_callback_may_unsubscribe_during_publish(self):
        notifier = LocalChangeNotifier()
        later = CallRecorder()
        holder = {}
        holder["unsubscribe"] = notifier.subscribe(lambda: holder["unsubscribe"]())
        notifier.subscribe(later)

        notifier.publish()
        assert later.calls == 1
        assert notifier.subscriber_count == 1


@pytest.mark.unit
class TestLocalSyncQueue:
    """Tests for the offline sync queue."""

    @pytest.fixture
    def store(self):
        return InMemoryDocumentStore()

    def test_enqueue_persists_in_order(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "create", {"id": "p1"})
        queue.enqueue("workout", "update", {"id": "w1"})

        pending = LocalSyncQueue(store).pending()
        assert [(i.entity, i.action, i.record["id"]) for i in pending] == [
            ("profile", "create", "p1"),
            ("workout", "update", "w1"),
        ]
        assert pending[0].queued_at.endswith("+00:00")

    def test_malformed_entries_dropped(self, store):
        store.save_all([{"entity": "profile"}])
        assert LocalSyncQueue(store).pending() == []

    def test_offline_push_and_pull(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "create", {"id": "p1"})

        assert queue.push() is False
        assert queue.pull() is None
        assert len(queue.pending()) == 1

    def test_same_record_kept_once(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("workout", "update", {"id": "w1", "sets": 1})
        queue.enqueue("workout", "update", {"id": "w1", "sets": 2})

        pending = queue.pending()
        assert [(i.action, i.record["sets"]) for i in pending] == [("update", 2)]

    def test_update_after_create_stays_create(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "create", {"id": "p1", "weight": 80})
        queue.enqueue("workout", "create", {"id": "w1"})
        queue.enqueue("profile", "update", {"id": "p1", "weight": 82})

        pending = queue.pending()
        assert [(i.entity, i.action) for i in pending] == [
            ("profile", "create"),
            ("workout", "create"),
        ]
        assert pending[0].record["weight"] == 82

    def test_delete_of_unpushed_create_drops_both(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "create", {"id": "p1"})
        queue.enqueue("profile", "delete", {"id": "p1"})
        assert queue.pending() == []

    def test_delete_replaces_pending_update(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "update", {"id": "p1"})
        queue.enqueue("profile", "delete", {"id": "p1"})
        assert [i.action for i in queue.pending()] == ["delete"]

    def test_same_id_different_entity_not_merged(self, store):
        queue = LocalSyncQueue(store)
        queue.enqueue("profile", "update", {"id": "x"})
        queue.enqueue("workout", "update", {"id": "x"})
        assert len(queue.pending()) == 2


@pytest.mark.unit
class TestSystemClock:
    def test_today_matches_now(self):
        clock = SystemClock()
        assert clock.now().date() in {clock.today(), SystemClock().today()}
