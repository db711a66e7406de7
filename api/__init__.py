"""
API Module
FastAPI routers for the DoseTrack application
"""

from api.medications import router as medications_router
from api.adherence import router as adherence_router

from api.deps import (
    get_db,
    get_current_owner_id,
    get_blob_store,
    get_intake_service,
    services,
)


__all__ = [
    # Routers
    "medications_router",
    "adherence_router",
    # Dependencies
    "get_db",
    "get_current_owner_id",
    "get_blob_store",
    "get_intake_service",
    "services",
]


def include_routers(app, prefix: str = "/api/v1"):
    """
    Include all API routers in the FastAPI app

    Usage:
        from api import include_routers
        include_routers(app)
    """
    app.include_router(medications_router, prefix=prefix)
    app.include_router(adherence_router, prefix=prefix)
