"""Search orchestration: validate, compile, dispatch and reshape."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from catalog_search.core.constants import (
    BASE_QUERY_PARAMS,
    DEFAULT_MAX_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_ORDER,
    K_AGGREGATIONS,
    K_DOC_SCORE,
    K_FACETS,
    K_HITS,
    K_SCORE,
    K_SOURCE,
    K_TOTAL,
    VALID_SORT_ORDERS,
)
from catalog_search.core.exceptions import BadRequestError, NotFoundError
from catalog_search.core.logging import get_logger
from catalog_search.core.models import SearchRequest
from catalog_search.repositories.document_repository import DocumentRepository
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.schemas.search import FetchResponse, SearchResponse
from catalog_search.searchable.facet import FacetBuilder, facet_field_name
from catalog_search.searchable.filter import FilterBuilder
from catalog_search.searchable.query import QueryBuilder
from catalog_search.services.engine_client import SearchEngineClient

logger = get_logger(__name__)


def _to_int(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def get_search_size(params: Mapping[str, Any]) -> int:
    """Page size from ``page_size``: default when missing or invalid, capped at the max."""
    size = _to_int(params.get("page_size"))
    if size <= 0:
        return DEFAULT_PAGE_SIZE
    return min(size, DEFAULT_MAX_PAGE_SIZE)


def get_search_starting_point(params: Mapping[str, Any]) -> int:
    """Offset of the first hit for the requested ``page`` (1-based, 0 means first)."""
    page = _to_int(params.get("page"))
    if page <= 0:
        return 0
    return get_search_size(params) * (page - 1)


def get_sort_order(params: Mapping[str, Any]) -> str:
    order = str(params.get("sort_order") or "").lower()
    return order if order in VALID_SORT_ORDERS else DEFAULT_SORT_ORDER


def reformat_result_documents(hits: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Each hit's stored source with its relevance score under ``score``."""
    return [{**(hit.get(K_SOURCE) or {}), K_DOC_SCORE: hit.get(K_SCORE)} for hit in hits]


def _total(hits: Mapping[str, Any]) -> int:
    total = hits.get(K_TOTAL, 0)
    if isinstance(total, Mapping):
        total = total.get("value", 0)
    return int(total or 0)


class SearchService:
    """Compiles parameter maps into engine requests and shapes the results."""

    def __init__(
        self,
        registry: SchemaRegistry,
        engine: SearchEngineClient,
        repository: DocumentRepository | None = None,
    ):
        self.registry = registry
        self.engine = engine
        self.repository = repository
        self.query_builder = QueryBuilder(registry)
        self.filter_builder = FilterBuilder(registry)
        self.facet_builder = FacetBuilder(registry)

    def validate_resource(self, resource: str) -> None:
        if not self.registry.has_resource(resource):
            raise NotFoundError(f"Unknown resource: {resource}")

    def validate_params(self, params: Mapping[str, Any]) -> None:
        """Reject any parameter that is neither a base param nor a mapped field.

        Mapped fields are taken across all resources; per-resource checks
        happen while the query and filters are built.
        """
        allowed = BASE_QUERY_PARAMS | self.registry.all_mapped_field_names()
        invalid = [key for key in params if key not in allowed]
        if invalid:
            raise BadRequestError(f"Invalid field(s) specified in query: {','.join(invalid)}")

    def build_sort_attributes(
        self, resource: str, params: Mapping[str, Any]
    ) -> tuple[str, str] | None:
        """``(index field, order)`` for ``sort_by``, or None for relevance order."""
        sort_by = params.get("sort_by")
        if not sort_by:
            return None

        field = self.registry.field(resource, str(sort_by))
        if field is None:
            raise BadRequestError(f"Invalid field specified in sort_by parameter: {sort_by}")
        if field.geo_point or field.subfields:
            raise BadRequestError(f"Non-sortable field specified in sort_by parameter: {sort_by}")

        return facet_field_name(field), get_sort_order(params)

    def build_source_fields(self, resource: str, params: Mapping[str, Any]) -> list[str] | None:
        raw = params.get("fields")
        if not raw:
            return None

        names = [name.strip() for name in str(raw).split(",") if name.strip()]
        invalid = [name for name in names if self.registry.field(resource, name) is None]
        if invalid:
            raise BadRequestError(
                f"Invalid field(s) specified in fields parameter: {','.join(invalid)}"
            )
        return names

    def build_request(self, resource: str, params: Mapping[str, Any]) -> SearchRequest:
        """Validate ``params`` and compile them into a SearchRequest.

        Raises:
            NotFoundError: If ``resource`` is not searchable.
            BadRequestError: If any parameter is invalid.
        """
        self.validate_resource(resource)
        self.validate_params(params)

        request = SearchRequest()
        got_queries = self.query_builder.build_all(request, resource, params)
        got_queries = self.filter_builder.build_all(request, resource, params) or got_queries
        self.facet_builder.build_all(
            request, resource, params.get("facets"), allow_empty_query=not got_queries
        )

        request.sort = self.build_sort_attributes(resource, params)
        request.source_fields = self.build_source_fields(resource, params)
        request.from_ = get_search_starting_point(params)
        request.size = get_search_size(params)

        if request.is_empty:
            logger.warning("Running a completely empty %s search", resource)
        return request

    def build_dictionary_wrapper(
        self, request: SearchRequest, response: Mapping[str, Any]
    ) -> SearchResponse:
        hits = response.get(K_HITS) or {}
        facets = response.get(K_AGGREGATIONS) or response.get(K_FACETS) or {}
        return SearchResponse(
            count=_total(hits),
            start=request.from_,
            limit=request.size,
            docs=reformat_result_documents(hits.get(K_HITS, [])),
            facets=facets,
        )

    async def search(self, resource: str, params: Mapping[str, Any]) -> SearchResponse:
        """Search one resource type.

        Args:
            resource: ``items`` or ``collections``.
            params: Flat request parameters.

        Returns:
            SearchResponse: The result envelope.
        """
        logger.info("Search %s: %s", resource, dict(params))
        request = self.build_request(resource, params)
        response = await self.engine.search(resource, request.to_body())
        result = self.build_dictionary_wrapper(request, response)
        logger.info(
            "Search %s completed: %s hits, %s returned", resource, result.count, len(result.docs)
        )
        return result

    async def fetch(self, resource: str, ids: str | Sequence[str]) -> FetchResponse:
        """Fetch stored documents of a resource by id."""
        self.validate_resource(resource)
        if self.repository is None:
            raise NotFoundError("Document repository not configured")

        docs = await self.repository.fetch(ids)
        logger.info("Fetched %s %s document(s)", len(docs), resource)
        return FetchResponse(count=len(docs), docs=docs)
