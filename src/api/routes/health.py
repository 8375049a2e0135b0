"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from api.models.responses import HealthResponse
from core.config import API_VERSION, DB_PATH

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    The request-log database is optional; its absence is reported but does
    not make the service unhealthy.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        database_available=DB_PATH.exists(),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
