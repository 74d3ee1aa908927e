"""Health Probes — liveness for the process, readiness for the shared database.

Invariants:
    - /api/v1/health/ answers 200 whenever the event loop is serving requests
    - /api/v1/health/ready answers 503 until the database round-trips, since both
      the relational lookups and the key/value tables live there
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app import __version__
from app.api.deps import get_services
from app.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "pledgebook-api", "version": __version__}


@router.get("/ready")
async def readiness(services: ServiceContainer = Depends(get_services)):
    if await services.db.health_check():
        return {"status": "ready", "checks": {"database": "healthy"}}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "checks": {"database": "unreachable"}},
    )
