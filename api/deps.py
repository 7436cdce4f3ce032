"""
FastAPI Dependency Providers for StrengthProfile.

This module wires the storage adapters, core services and use cases together
and exposes them as FastAPI dependencies.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- All services share one Container, built once per process, so there is
  exactly one ActiveSessionManager (and one active session) per app
- Use case providers create new instances per-request over the shared services

Usage in routers:
    from api.deps import get_session_manager
    from backend.core.session_manager import ActiveSessionManager

    @router.get("/session")
    def current_session(
        manager: ActiveSessionManager = Depends(get_session_manager),
    ):
        return manager.get_session()

Testing:
    # Swap the whole object graph for one over in-memory stores
    container = build_container(Settings(_env_file=None), clock=FakeClock(...))
    app.dependency_overrides[get_container] = lambda: container
"""

import logging
import pathlib
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ChangeNotifier,
    Clock,
    DocumentStore,
    ExerciseCatalog,
    SyncQueue,
)
from application.use_cases import EndSessionUseCase, LogSetUseCase, SyncCloudUseCase

# Core services
from backend.core.catalog import StaticExerciseCatalog
from backend.core.daily_summary import DailySummaryService
from backend.core.in_progress import InProgressExerciseTracker
from backend.core.profile_service import ProfileService
from backend.core.progression_service import ProgressionService
from backend.core.routines import RoutineStore
from backend.core.session_manager import ActiveSessionManager
from backend.core.timer_settings import TimerSettingsStore
from backend.core.workout_history import WorkoutHistoryStore

# Concrete implementations
from infrastructure import (
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    LocalChangeNotifier,
    LocalSyncQueue,
    SupabaseSyncQueue,
    SystemClock,
)

# Settings
from backend.settings import Settings, get_settings as _get_settings

logger = logging.getLogger(__name__)

COLLECTIONS = (
    "profiles",
    "workouts",
    "active_session",
    "timer_settings",
    "timer_history",
    "routines",
    "routine_selection",
    "routine_exercises",
    "in_progress",
    "sync_queue",
)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns None unless cloud sync is enabled and fully configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.cloud_sync_configured:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


# =============================================================================
# Container
# =============================================================================


@dataclass
class Container:
    """The application's object graph."""

    settings: Settings
    clock: Clock
    catalog: ExerciseCatalog
    session_notifier: ChangeNotifier
    sync_queue: SyncQueue
    session_manager: ActiveSessionManager
    history: WorkoutHistoryStore
    profiles: ProfileService
    progression: ProgressionService
    daily_summary: DailySummaryService
    timer: TimerSettingsStore
    routines: RoutineStore
    in_progress: InProgressExerciseTracker


def _make_store(
    settings: Settings,
    name: str,
    notifier: Optional[ChangeNotifier] = None,
) -> DocumentStore:
    if settings.data_dir:
        return JsonFileDocumentStore(pathlib.Path(settings.data_dir) / f"{name}.json", notifier)
    return InMemoryDocumentStore(notifier=notifier)


def build_container(
    settings: Settings,
    *,
    clock: Optional[Clock] = None,
    supabase_client: Optional[Client] = None,
) -> Container:
    """
    Build every service over storage chosen by settings.

    JSON files under settings.data_dir when set, otherwise in-memory stores.
    Cloud sync uses Supabase when a client is given, otherwise pending
    changes are only queued locally.
    """
    clock = clock or SystemClock()
    session_notifier = LocalChangeNotifier("active_session")
    in_progress_notifier = LocalChangeNotifier("in_progress")
    notifiers = {
        "active_session": session_notifier,
        "in_progress": in_progress_notifier,
    }
    stores = {
        name: _make_store(settings, name, notifiers.get(name))
        for name in COLLECTIONS
    }

    if supabase_client is not None:
        sync_queue: SyncQueue = SupabaseSyncQueue(
            supabase_client, stores["sync_queue"], settings.sync_user_id
        )
    else:
        sync_queue = LocalSyncQueue(stores["sync_queue"])

    catalog = StaticExerciseCatalog()
    history = WorkoutHistoryStore(stores["workouts"], clock, sync_queue)
    profiles = ProfileService(stores["profiles"], clock, sync_queue)

    return Container(
        settings=settings,
        clock=clock,
        catalog=catalog,
        session_notifier=session_notifier,
        sync_queue=sync_queue,
        session_manager=ActiveSessionManager(
            stores["active_session"],
            session_notifier,
            clock,
            auto_end_minutes=settings.session_auto_end_minutes,
            inactivity_minutes=settings.session_inactivity_minutes,
        ),
        history=history,
        profiles=profiles,
        progression=ProgressionService(
            history,
            catalog,
            lookback_workouts=settings.downgrade_lookback_workouts,
        ),
        daily_summary=DailySummaryService(history, catalog, profiles),
        timer=TimerSettingsStore(stores["timer_settings"], stores["timer_history"]),
        routines=RoutineStore(
            stores["routines"],
            stores["routine_selection"],
            stores["routine_exercises"],
            catalog,
            clock,
        ),
        in_progress=InProgressExerciseTracker(
            stores["in_progress"], in_progress_notifier, clock
        ),
    )


@lru_cache
def get_container() -> Container:
    """
    Get the process-wide Container (cached).

    For testing, override this provider or clear the cache with
    get_container.cache_clear().
    """
    settings = _get_settings()
    container = build_container(settings, supabase_client=get_supabase_client())
    logger.info(
        f"Storage: {settings.data_dir or 'in-memory'}; "
        f"cloud sync {'on' if settings.cloud_sync_configured else 'off'}"
    )
    return container


# =============================================================================
# Service Providers
# =============================================================================


def get_catalog(container: Container = Depends(get_container)) -> ExerciseCatalog:
    return container.catalog


def get_session_manager(
    container: Container = Depends(get_container),
) -> ActiveSessionManager:
    """The single ActiveSessionManager."""
    return container.session_manager


def get_history_store(
    container: Container = Depends(get_container),
) -> WorkoutHistoryStore:
    return container.history


def get_profile_service(
    container: Container = Depends(get_container),
) -> ProfileService:
    return container.profiles


def get_progression_service(
    container: Container = Depends(get_container),
) -> ProgressionService:
    return container.progression


def get_daily_summary_service(
    container: Container = Depends(get_container),
) -> DailySummaryService:
    return container.daily_summary


def get_timer_settings_store(
    container: Container = Depends(get_container),
) -> TimerSettingsStore:
    return container.timer


def get_sync_queue(container: Container = Depends(get_container)) -> SyncQueue:
    return container.sync_queue


def get_routine_store(
    container: Container = Depends(get_container),
) -> RoutineStore:
    return container.routines


def get_in_progress_tracker(
    container: Container = Depends(get_container),
) -> InProgressExerciseTracker:
    return container.in_progress


# =============================================================================
# Use Case Providers
# =============================================================================


def get_log_set_use_case(
    container: Container = Depends(get_container),
) -> LogSetUseCase:
    """
    Get LogSetUseCase instance.

    Returns:
        LogSetUseCase: Use case over the shared services
    """
    return LogSetUseCase(
        session_manager=container.session_manager,
        history=container.history,
        progression=container.progression,
        profiles=container.profiles,
        catalog=container.catalog,
    )


def get_end_session_use_case(
    container: Container = Depends(get_container),
) -> EndSessionUseCase:
    return EndSessionUseCase(session_manager=container.session_manager)


def get_sync_cloud_use_case(
    container: Container = Depends(get_container),
    sync_queue: SyncQueue = Depends(get_sync_queue),
) -> SyncCloudUseCase:
    """
    Get SyncCloudUseCase instance.

    Takes the queue from get_sync_queue so it can be overridden on its own.
    """
    return SyncCloudUseCase(
        sync_queue=sync_queue,
        profiles=container.profiles,
        history=container.history,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    # Container
    "Container",
    "build_container",
    "get_container",
    # Services
    "get_catalog",
    "get_session_manager",
    "get_history_store",
    "get_profile_service",
    "get_progression_service",
    "get_daily_summary_service",
    "get_timer_settings_store",
    "get_sync_queue",
    "get_routine_store",
    "get_in_progress_tracker",
    # Use cases
    "get_log_set_use_case",
    "get_end_session_use_case",
    "get_sync_cloud_use_case",
]
