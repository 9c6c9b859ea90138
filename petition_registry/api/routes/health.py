"""Health check endpoint for the petition registry API."""

from fastapi import APIRouter, Depends

from petition_registry.api.dependencies.petition_registry import (
    get_petition_registry_service,
)
from petition_registry.api.models.health import HealthResponse
from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: PetitionRegistryService = Depends(get_petition_registry_service),
) -> HealthResponse:
    """Return health status.

    Returns:
        Health status with 200 OK.
    """
    return HealthResponse(
        status="healthy",
        petition_count=service.get_petition_count().unwrap(),
    )
