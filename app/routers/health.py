"""
Health check endpoint.
"""
from fastapi import APIRouter
from datetime import datetime, timezone

from app.config import settings
from app.models.schemas import HealthCheckResponse

router = APIRouter()


@router.get("/", response_model=HealthCheckResponse)
async def health_check():
    """
    Liveness check. The service is stateless, so being able to answer is
    the whole check.

    Returns:
        HealthCheckResponse with service name, version and timestamp
    """
    return HealthCheckResponse(
        status="ok",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
