"""Health Routes — process liveness and message-store readiness.

Invariants:
    - GET /health/ never touches the database and answers 200 while the process runs
    - GET /health/ready answers 200 only when the message store accepts a query,
      503 when it is unreachable or was never initialized
    - Neither route requires a bearer token
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from messagely.infrastructure import database
from messagely.infrastructure.observability import SERVICE_NAME

router = APIRouter(prefix="/health", tags=["health"])

API_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": API_VERSION}


@router.get("/ready")
async def readiness():
    """Ready when the store answers; otherwise 503 so traffic is held back."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
