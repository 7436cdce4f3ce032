"""
Unit tests for application/use_cases/end_session.py
"""
from datetime import datetime

import pytest

from application.use_cases import EndSessionUseCase, build_summary
from backend.core.session_manager import ActiveSessionManager
from domain.models import Level
from infrastructure.storage import InMemoryDocumentStore, LocalChangeNotifier
from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 18, 0))


@pytest.fixture
def manager(clock):
    notifier = LocalChangeNotifier()
    return ActiveSessionManager(InMemoryDocumentStore(notifier=notifier), notifier, clock)


@pytest.fixture
def use_case(manager):
    return EndSessionUseCase(session_manager=manager)


@pytest.fixture
def workout(manager, clock):
    manager.append_set("bench-press", "Bench Press", 40, 10, is_warmup=True)
    clock.advance(minutes=30)
    manager.append_set("bench-press", "Bench Press", 80, 5)
    clock.advance(minutes=35)
    manager.append_set("squat", "Squat", 100, 5)
    manager.record_pr("squat", "Squat", 100, 5)
    manager.record_level_up("squat", "Squat", Level.INTERMEDIATE)


@pytest.mark.unit
class TestSummary:
    """Tests for building the summary."""

    def test_no_session(self, use_case):
        assert use_case.summary() is None

    def test_session_without_sets(self, use_case, manager):
        manager.start()
        assert use_case.summary() is None

    def test_summary_fields(self, use_case, workout):
        summary = use_case.summary()

        assert summary.duration_text == "1h 5m"
        assert summary.duration_minutes == 65
        assert summary.exercise_count == 2
        assert summary.total_sets == 3
        assert summary.working_sets == 2
        assert summary.total_volume == 80 * 5 + 100 * 5
        assert [(e.exercise_id, e.sets, e.working_sets, e.max_weight) for e in summary.exercises] == [
            ("bench-press", 2, 1, 80),
            ("squat", 1, 1, 100),
        ]
        assert [p.exercise_id for p in summary.prs] == ["squat"]
        assert [l.new_level for l in summary.level_ups] == [Level.INTERMEDIATE]

    def test_summary_does_not_end_session(self, use_case, manager, workout):
        use_case.summary()
        assert manager.get_session() is not None

    def test_short_session_duration(self, manager):
        manager.append_set("squat", "Squat", 100, 5)
        assert build_summary(manager.get_session()).duration_text == "0m"


@pytest.mark.unit
class TestDismissAndRecover:
    def test_dismiss_clears(self, use_case, manager, workout):
        use_case.dismiss()
        assert manager.get_session() is None

    def test_recover_stale_once(self, use_case, clock, workout):
        clock.set(datetime(2026, 3, 3, 7, 0))

        recovered = use_case.recover_stale()
        assert recovered.exercise_count == 2
        assert use_case.recover_stale() is None

    def test_nothing_to_recover(self, use_case, workout):
        assert use_case.recover_stale() is None
