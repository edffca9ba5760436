"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends

from catalog_search.config import Settings, get_settings
from catalog_search.repositories.document_repository import DocumentRepository
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.services.engine_client import SearchEngineClient
from catalog_search.services.search_service import SearchService

# Common dependencies that can be injected into route handlers
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Module-level cache for the schema registry; it is immutable once built.
_schema_registry_cache: SchemaRegistry | None = None


def get_schema_registry() -> SchemaRegistry:
    """Get or create the shared SchemaRegistry.

    Returns:
        SchemaRegistry instance.
    """
    global _schema_registry_cache

    if _schema_registry_cache is None:
        _schema_registry_cache = SchemaRegistry.default()

    return _schema_registry_cache


# Module-level cache for SearchService singleton
_search_service_cache: SearchService | None = None


def get_search_service(
    settings: Annotated[Settings, Depends(get_settings)],
    registry: Annotated[SchemaRegistry, Depends(get_schema_registry)],
) -> SearchService:
    """Get a SearchService instance.

    Returns:
        SearchService instance.
    """
    global _search_service_cache

    if _search_service_cache is None:
        _search_service_cache = SearchService(
            registry=registry,
            engine=SearchEngineClient(settings),
            repository=DocumentRepository(settings),
        )

    return _search_service_cache


async def close_search_service() -> None:
    """Release the cached service's HTTP clients."""
    global _search_service_cache

    if _search_service_cache is None:
        return

    await _search_service_cache.engine.aclose()
    if _search_service_cache.repository is not None:
        await _search_service_cache.repository.aclose()
    _search_service_cache = None


# Type aliases for dependency injection
SchemaRegistryDep = Annotated[SchemaRegistry, Depends(get_schema_registry)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
