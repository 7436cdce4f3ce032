"""
Fakes and Factories for Testing.

This package provides in-memory fakes for the ports that have no in-memory
adapter in infrastructure/ (clock, sync queue), plus factory functions for
common test data. Document stores use infrastructure.storage's
InMemoryDocumentStore directly.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeClock, make_record, create_container

    clock = FakeClock(datetime(2026, 3, 2, 18, 0))
    container = create_container(clock)
    container.history.replace_all([
        make_record("p1", "bench-press", "2026-03-01", [80, 80, 75]),
    ])
"""
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from api.deps import Container, build_container
from backend.settings import Settings
from domain.models import Level, Profile, Sex, WorkoutRecord, WorkoutSet
from tests.fakes.clock import FakeClock
from tests.fakes.recorder import CallRecorder
from tests.fakes.sync_queue import FakeSyncQueue


# =============================================================================
# Factory Functions
# =============================================================================


def make_sets(weights: Iterable[Optional[float]], reps: int = 5) -> List[WorkoutSet]:
    """One set per weight; a None weight makes an incomplete set."""
    return [WorkoutSet(weight=w, reps=reps if w is not None else None) for w in weights]


def make_record(
    profile_id: str,
    exercise_id: str,
    date: str,
    weights: Iterable[Optional[float]],
    *,
    reps: int = 5,
    record_id: Optional[str] = None,
) -> WorkoutRecord:
    """
    Create a history record.

    Args:
        profile_id: Profile the record belongs to
        exercise_id: Catalog exercise id
        date: YYYY-MM-DD
        weights: Weight of each set, in order
        reps: Reps for every complete set
    """
    return WorkoutRecord(
        id=record_id or str(uuid.uuid4()),
        date=date,
        profile_id=profile_id,
        exercise_id=exercise_id,
        sets=make_sets(weights, reps),
    )


def make_profile(
    *,
    profile_id: str = "profile_1",
    name: str = "Sam",
    weight: float = 80.0,
    sex: Optional[Sex] = None,
    ratings: Optional[dict] = None,
    updated_at: datetime = datetime(2026, 3, 1, 12, 0),
) -> Profile:
    """Create a Profile model (not stored)."""
    return Profile(
        id=profile_id,
        name=name,
        age=30,
        height=180,
        weight=weight,
        sex=sex,
        exercise_ratings={k: Level(v) for k, v in (ratings or {}).items()},
        created_at=datetime(2026, 1, 1, 9, 0),
        updated_at=updated_at,
    )


def create_container(
    clock: Optional[FakeClock] = None,
    **settings_overrides,
) -> Container:
    """
    Build the full object graph over in-memory stores.

    Args:
        clock: Time source (a fresh FakeClock if not given)
        **settings_overrides: Settings fields to override
    """
    settings = Settings(
        _env_file=None,
        environment="test",
        data_dir=None,
        sync_enabled=False,
        **settings_overrides,
    )
    return build_container(settings, clock=clock or FakeClock())


__all__ = [
    # Fakes
    "FakeClock",
    "FakeSyncQueue",
    "CallRecorder",
    # Factories
    "make_sets",
    "make_record",
    "make_profile",
    "create_container",
]
