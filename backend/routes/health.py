"""
Health check route for the Invoice Dashboard backend.

PUBLIC: listed in the gate's ungated paths, so it never redirects and never
touches the database.
"""

from fastapi import APIRouter

from backend.config import settings
from backend.schemas.health import HealthResponse
from backend.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Liveness probe for load balancers; no session required.",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Example response:
        {"status": "ok", "service": "invoice-dashboard", "environment": "production"}
    """
    logger.debug("Health check endpoint called")
    return HealthResponse(environment=settings.ENVIRONMENT)
