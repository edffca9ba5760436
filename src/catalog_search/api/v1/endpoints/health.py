"""Health check endpoint."""

from fastapi import APIRouter

from catalog_search.dependencies import SchemaRegistryDep, SettingsDep
from catalog_search.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the API and the searchable resources",
)
async def health_check(settings: SettingsDep, registry: SchemaRegistryDep) -> HealthResponse:
    """Report API status without contacting the search engine.

    Args:
        settings: Injected application settings.
        registry: Injected schema registry.

    Returns:
        HealthResponse: Health status information.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        resources=list(registry.resources()),
    )
