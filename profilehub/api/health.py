"""Health check endpoint with optional database connectivity check."""

from fastapi import APIRouter

from profilehub.core.config import settings
from profilehub.core.database import check_db_connected, get_sessionmaker
from profilehub.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
async def get_health() -> HealthResponse:
    """
    Return service health status and, for the SQL store, database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = None
    if settings.USER_STORE == "sql":
        async with get_sessionmaker()() as db:
            db_status = "connected" if await check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        user_store=settings.USER_STORE,
        database=db_status,
    )
