"""
Unit tests for application/use_cases/sync_cloud.py

Tests cover:
- Push, pull and merge of profiles and workouts in one round
- Offline rounds leave local data and the queue untouched
"""
from datetime import datetime, timedelta

import pytest

from application.use_cases import SyncCloudUseCase
from backend.core.profile_service import ProfileService
from backend.core.workout_history import WorkoutHistoryStore
from infrastructure.storage import InMemoryDocumentStore
from tests.fakes import FakeClock, FakeSyncQueue, make_profile, make_record


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 18, 0))


@pytest.fixture
def sync_queue():
    return FakeSyncQueue()


@pytest.fixture
def profiles(clock, sync_queue):
    return ProfileService(InMemoryDocumentStore(), clock, sync_queue)


@pytest.fixture
def history(clock, sync_queue):
    return WorkoutHistoryStore(InMemoryDocumentStore(), clock, sync_queue)


@pytest.fixture
def use_case(sync_queue, profiles, history):
    return SyncCloudUseCase(sync_queue=sync_queue, profiles=profiles, history=history)


@pytest.mark.unit
class TestSyncCloud:
    """Tests for SyncCloudUseCase.execute."""

    def test_push_pull_and_merge(self, use_case, sync_queue, profiles, history, clock):
        local = profiles.create_profile({"name": "Sam", "age": 30, "height": 180, "weight": 80})
        newer = local.model_copy(
            update={"weight": 90.0, "updated_at": local.updated_at + timedelta(hours=1)}
        )
        sync_queue.seed_snapshot(
            profiles=[
                newer.model_dump(mode="json"),
                make_profile(profile_id="cloud_1").model_dump(mode="json"),
            ],
            workouts=[make_record("cloud_1", "squat", "2026-02-20", [100]).model_dump(mode="json")],
        )

        result = use_case.execute()

        assert result.pushed is True
        assert result.pulled is True
        assert result.pending == 0
        assert result.workouts_added == 1
        assert [(i.entity, i.action) for i in sync_queue.pushed] == [("profile", "create")]
        assert profiles.get_profile(local.id).weight == 90.0
        assert profiles.get_profile("cloud_1") is not None
        assert history.get_exercise_pr("cloud_1", "squat") == 100
        assert profiles.last_sync_time == clock.now()

    def test_known_workouts_not_added_twice(self, use_case, sync_queue, history):
        record = make_record("p1", "squat", "2026-02-20", [100])
        history.replace_all([record])
        sync_queue.seed_snapshot(workouts=[record.model_dump(mode="json")])

        assert use_case.execute().workouts_added == 0
        assert len(history.get_all()) == 1

    def test_offline(self, use_case, sync_queue, profiles):
        profiles.create_profile({"name": "Sam", "age": 30, "height": 180, "weight": 80})
        sync_queue.online = False

        result = use_case.execute()

        assert result.pushed is False
        assert result.pulled is False
        assert result.pending == 1
        assert profiles.last_sync_time is None
