"""
Router package for StrengthProfile.

This package contains all API routers organized by domain:
- health: Health and readiness checks
- exercises: Exercise catalog, strength thresholds and warm-ups
- profiles: Lifter profiles, exercise ratings and cloud sync
- workouts: Set logging, history, progression and daily summaries
- session: The active workout session and its summary
- timer: Rest timer preferences
- routines: Training splits, the selected routine and tracked exercises
"""

from api.routers.health import router as health_router
from api.routers.exercises import router as exercises_router
from api.routers.profiles import router as profiles_router
from api.routers.workouts import router as workouts_router
from api.routers.session import router as session_router
from api.routers.timer import router as timer_router
from api.routers.routines import router as routines_router

__all__ = [
    "health_router",
    "exercises_router",
    "profiles_router",
    "workouts_router",
    "session_router",
    "timer_router",
    "routines_router",
]
