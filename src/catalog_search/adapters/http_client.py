"""Async JSON-over-HTTP client shared by the engine and repository adapters."""

from __future__ import annotations

from typing import Any

import httpx

from catalog_search.core.exceptions import InternalServerError, ServiceUnavailableError
from catalog_search.core.logging import get_logger

logger = get_logger(__name__)


class JsonHttpClient:
    """Thin httpx wrapper mapping transport failures onto search errors.

    Connection failures and timeouts become ``ServiceUnavailableError``; any
    other failure, including error statuses, becomes ``InternalServerError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        service: str = "backend",
    ):
        self.service = service
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        """Close the underlying client."""
        await self._client.aclose()

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return await self.request_json("GET", url, **kwargs)

    async def post_json(self, url: str, **kwargs: Any) -> Any:
        return await self.request_json("POST", url, **kwargs)

    async def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            logger.error("%s unreachable: %s %s (%s)", self.service, method, url, exc)
            raise ServiceUnavailableError(f"{self.service} unavailable") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "%s returned HTTP %s for %s %s: %s",
                self.service,
                exc.response.status_code,
                method,
                url,
                exc.response.text,
            )
            raise InternalServerError(
                f"{self.service} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s %s (%s)", self.service, method, url, exc)
            raise InternalServerError(f"{self.service} request failed") from exc
        except ValueError as exc:
            raise InternalServerError(f"{self.service} returned invalid JSON") from exc
