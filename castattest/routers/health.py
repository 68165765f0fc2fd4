"""Health check and status endpoints."""

from fastapi import APIRouter, Request

from castattest import __version__
from castattest.dependencies import AppSettings, get_attestation_service
from castattest.errors import ConfigurationError
from castattest.models import HealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthCheck,
    summary="Health check",
    description="Check the health of the webhook and its RPC provider.",
)
async def health_check(request: Request, settings: AppSettings) -> HealthCheck:
    """Check health of the attestation client."""
    try:
        service = await get_attestation_service(request)
        healthy = await service.client.health_check()
        blockchain_status = "healthy" if healthy else "unhealthy"
    except ConfigurationError:
        blockchain_status = "misconfigured"

    return HealthCheck(
        status="healthy" if blockchain_status == "healthy" else "degraded",
        version=__version__,
        environment=settings.environment.value,
        blockchain=blockchain_status,
    )


@router.get(
    "/",
    summary="API information",
    description="Get basic API information.",
)
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "castattest",
        "version": __version__,
        "description": "Farcaster cast provenance attestations on EAS",
        "documentation": "/docs",
        "health": "/health",
        "mint": "/api/mint",
    }
