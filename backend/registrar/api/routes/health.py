"""Health Routes — liveness and readiness probes.

Invariants:
    - GET /api/v1/health/ answers 200 while the process serves requests
    - GET /api/v1/health/ready answers 503 until the database round-trips

Design Decisions:
    - db_manager is read through the module at request time: it is only
      assigned once the lifespan has called init_db()
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from registrar.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "registrar-api"
SERVICE_VERSION = "1.0.0"


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
