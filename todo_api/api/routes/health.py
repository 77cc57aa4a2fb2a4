"""Health & Readiness — liveness and database readiness for the Todo API.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process serves requests
    - GET /api/v1/health/ready answers 503 until the lifespan has built a
      database manager AND that manager can run a query
    - Service name and version come from the FastAPI app, declared once in main.py

Design Decisions:
    - Database manager read from app.state (set by the lifespan), never imported:
      tests swap it without patching modules
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


async def _database_ready(request: Request) -> bool:
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        logger.warning("Readiness checked before database initialisation")
        return False
    return await db_manager.health_check()


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    return {
        "status": "healthy",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """503 with a reason while the database is unavailable."""
    if not await _database_ready(request):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
