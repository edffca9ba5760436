"""Search engine transport."""

from __future__ import annotations

import json
from typing import Any

import httpx

from catalog_search.adapters.http_client import JsonHttpClient
from catalog_search.config import Settings
from catalog_search.core.logging import get_logger

logger = get_logger(__name__)


class SearchEngineClient:
    """Sends compiled request bodies to the engine's ``_search`` endpoint."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.http = JsonHttpClient(
            base_url=settings.search_endpoint,
            timeout=settings.search_timeout,
            client=client,
            service="Search engine",
        )
        logger.info("SearchEngineClient initialized for %s", settings.search_endpoint)

    async def aclose(self) -> None:
        await self.http.aclose()

    def index_for(self, resource: str) -> str:
        """Index holding the documents of one resource type."""
        return f"{self.settings.search_index}-{resource}"

    async def search(self, resource: str, body: dict[str, Any]) -> dict[str, Any]:
        """Run one search and return the raw engine response.

        Raises:
            ServiceUnavailableError: If the engine cannot be reached.
            InternalServerError: If the engine rejects the request.
        """
        index = self.index_for(resource)
        logger.debug("Engine request to %s: %s", index, json.dumps(body))
        return await self.http.post_json(f"/{index}/_search", json=body)
