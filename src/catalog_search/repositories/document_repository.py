"""Read-only access to stored documents by id."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from catalog_search.adapters.http_client import JsonHttpClient
from catalog_search.config import Settings
from catalog_search.core.exceptions import NotFoundError
from catalog_search.core.logging import get_logger

logger = get_logger(__name__)


def split_ids(ids: str | Sequence[str]) -> list[str]:
    """Accept ``["a", "b"]``, ``"a"`` or ``"a, b"`` and return a clean id list."""
    if isinstance(ids, str):
        ids = ids.split(",")
    return [doc_id.strip() for doc_id in ids if doc_id and doc_id.strip()]


class DocumentRepository:
    """Bulk document lookup against the repository database."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.database = settings.repository_database
        self.http = JsonHttpClient(
            base_url=settings.repository_endpoint,
            timeout=settings.repository_timeout,
            client=client,
            service="Document repository",
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def fetch(self, ids: str | Sequence[str]) -> list[dict[str, Any]]:
        """Fetch documents in the order requested.

        Ids with no stored document are left out.

        Raises:
            NotFoundError: If none of the ids exist.
        """
        id_list = split_ids(ids)
        if not id_list:
            raise NotFoundError("No ids specified")

        response = await self.http.post_json(
            f"/{self.database}/_all_docs",
            params={"include_docs": "true"},
            json={"keys": id_list},
        )

        docs = [row["doc"] for row in response.get("rows", []) if row.get("doc")]
        missing = len(id_list) - len(docs)
        if missing:
            logger.info("Fetch missed %s of %s ids", missing, len(id_list))
        if not docs:
            raise NotFoundError(f"No documents found for id(s): {', '.join(id_list)}")
        return docs
