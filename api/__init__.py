"""
API package for StrengthProfile.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_container,
    get_catalog,
    get_session_manager,
    get_history_store,
    get_profile_service,
    get_progression_service,
    get_daily_summary_service,
    get_timer_settings_store,
    get_sync_queue,
    get_log_set_use_case,
    get_end_session_use_case,
)

__all__ = [
    # Settings
    "get_settings",
    # Container
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
    # Use cases
    "get_log_set_use_case",
    "get_end_session_use_case",
]
