"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import Container, get_container

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


# =============================================================================
# Health Check Endpoints
# =============================================================================


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/ready")
def ready(container: Container = Depends(get_container)):
    """
    Readiness endpoint: storage backend, catalog size and pending sync items.
    """
    settings = container.settings
    return {
        "status": "ok",
        "environment": settings.environment,
        "storage": "json" if settings.data_dir else "memory",
        "exercises": len(container.catalog.get_all()),
        "cloud_sync": settings.cloud_sync_configured,
        "pending_sync_items": len(container.sync_queue.pending()),
    }
