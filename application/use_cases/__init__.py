"""
Application Use Cases for StrengthProfile.

This package contains application-level use cases that orchestrate the core
services (session manager, history, progression, profiles). Use cases are the
entry points for workout operations and contain the workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate core services and ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import LogSetUseCase, EndSessionUseCase

    log_set = LogSetUseCase(
        session_manager=session_manager,
        history=history,
        progression=progression,
        profiles=profiles,
        catalog=catalog,
    )
    result = log_set.execute(
        profile_id="profile_1",
        exercise_id="bench-press",
        sets=sets,
        set_index=0,
    )

    end_session = EndSessionUseCase(session_manager=session_manager)
    summary = end_session.summary()

    sync = SyncCloudUseCase(sync_queue=sync_queue, profiles=profiles, history=history)
    result = sync.execute()
"""

from application.use_cases.end_session import (
    EndSessionUseCase,
    ExerciseSummary,
    SessionSummary,
    build_summary,
)
from application.use_cases.log_set import (
    DowngradeResult,
    LogSetResult,
    LogSetUseCase,
)
from application.use_cases.sync_cloud import SyncCloudUseCase, SyncResult

__all__ = [
    # LogSet
    "LogSetUseCase",
    "LogSetResult",
    "DowngradeResult",
    # EndSession
    "EndSessionUseCase",
    "SessionSummary",
    "ExerciseSummary",
    "build_summary",
    # SyncCloud
    "SyncCloudUseCase",
    "SyncResult",
]
