"""
Unit tests for infrastructure/db/sync_repository.py

The Supabase client is a MagicMock; these tests pin the query shapes sent
to the profiles/workouts tables and the queue's failure handling.
"""
from unittest.mock import MagicMock

import pytest

from infrastructure.db import SupabaseSyncQueue
from infrastructure.storage import InMemoryDocumentStore


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def queue(client, store):
    return SupabaseSyncQueue(client, store, "user-1")


@pytest.mark.unit
class TestPush:
    """Tests for SupabaseSyncQueue.push."""

    def test_empty_queue_is_drained(self, queue, client):
        assert queue.push() is True
        client.table.assert_not_called()

    def test_upsert_wraps_record(self, queue, client):
        record = {"id": "p1", "name": "Sam", "updated_at": "2026-03-02T18:00:00"}
        queue.enqueue("profile", "update", record)

        assert queue.push() is True

        client.table.assert_called_with("profiles")
        client.table.return_value.upsert.assert_called_once_with({
            "id": "p1",
            "user_id": "user-1",
            "data": record,
            "updated_at": "2026-03-02T18:00:00",
        })
        assert queue.pending() == []

    def test_workout_without_updated_at_uses_queue_time(self, queue, client):
        queue.enqueue("workout", "create", {"id": "w1"})
        queued_at = queue.pending()[0].queued_at

        queue.push()

        client.table.assert_called_with("workouts")
        payload = client.table.return_value.upsert.call_args[0][0]
        assert payload["updated_at"] == queued_at

    def test_delete_scoped_to_user(self, queue, client):
        queue.enqueue("profile", "delete", {"id": "p1"})
        queue.push()

        delete = client.table.return_value.delete.return_value
        delete.eq.assert_called_once_with("id", "p1")
        delete.eq.return_value.eq.assert_called_once_with("user_id", "user-1")

    def test_failure_keeps_failed_and_later_items(self, queue, client):
        queue.enqueue("profile", "create", {"id": "p1"})
        queue.enqueue("profile", "update", {"id": "p2"})
        queue.enqueue("profile", "update", {"id": "p3"})

        upsert = client.table.return_value.upsert
        upsert.return_value.execute.side_effect = [None, RuntimeError("offline"), None]

        assert queue.push() is False
        assert [i.record["id"] for i in queue.pending()] == ["p2", "p3"]


@pytest.mark.unit
class TestPull:
    """Tests for SupabaseSyncQueue.pull."""

    def test_snapshot_unwraps_data(self, queue, client):
        result = MagicMock()
        result.data = [{"id": "p1", "data": {"id": "p1", "name": "Sam"}}, {"id": "x", "data": None}]
        client.table.return_value.select.return_value.eq.return_value.execute.return_value = result

        snapshot = queue.pull()

        assert snapshot.profiles == [{"id": "p1", "name": "Sam"}]
        assert snapshot.workouts == [{"id": "p1", "name": "Sam"}]
        client.table.return_value.select.assert_called_with("id, data")
        client.table.return_value.select.return_value.eq.assert_called_with("user_id", "user-1")

    def test_failure_returns_none(self, queue, client):
        client.table.side_effect = RuntimeError("offline")
        assert queue.pull() is None
