"""Health & Readiness Probes: welcome, liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Both answer in the response envelope like every other route
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from book_api.core.envelope import failure_envelope, success_envelope
from book_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
async def welcome():
    return success_envelope("Welcome to the Book API")


@router.get("/health/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return success_envelope(
        "healthy", {"service": "book-api", "version": "1.0.0"},
    )


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe, includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=failure_envelope(
                "not_ready", status.HTTP_503_SERVICE_UNAVAILABLE, "database_unavailable",
            ),
        )
    return success_envelope("ready", {"checks": {"database": "healthy"}})
