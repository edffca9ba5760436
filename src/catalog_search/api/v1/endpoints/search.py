"""Search and fetch endpoints for items and collections."""

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_search.core.constants import RESOURCE_COLLECTIONS, RESOURCE_ITEMS
from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.logging import get_logger
from catalog_search.core.responses import is_valid_callback, jsonp_response
from catalog_search.dependencies import SearchServiceDep
from catalog_search.schemas.search import FetchResponse, SearchResponse

logger = get_logger(__name__)

router = APIRouter(tags=["search"])


def render_as_json(result: BaseModel, callback: str | None) -> Response:
    """Render a result as JSON, or as JSONP when a ``callback`` is given."""
    if not callback:
        return JSONResponse(content=result.model_dump(mode="json"))

    if not is_valid_callback(callback):
        raise BadRequestError(f"Invalid callback parameter: {callback}")

    return jsonp_response(callback, result.model_dump(mode="json"))


async def _search(resource: str, request: Request, search_service: SearchServiceDep) -> Response:
    params = dict(request.query_params)
    result = await search_service.search(resource, params)
    return render_as_json(result, params.get("callback"))


async def _fetch(
    resource: str, ids: str, request: Request, search_service: SearchServiceDep
) -> Response:
    result = await search_service.fetch(resource, ids)
    return render_as_json(result, request.query_params.get("callback"))


@router.get(
    "/items",
    response_model=SearchResponse,
    summary="Search Items",
    description="Full-text search, filtering and faceting over items",
    status_code=status.HTTP_200_OK,
)
async def search_items(request: Request, search_service: SearchServiceDep) -> Response:
    """Search items.

    Accepts ``q``, any mapped item field, ``facets``, ``sort_by``,
    ``sort_order``, ``page``, ``page_size``, ``fields`` and ``callback``.
    """
    return await _search(RESOURCE_ITEMS, request, search_service)


@router.get(
    "/collections",
    response_model=SearchResponse,
    summary="Search Collections",
    description="Full-text search, filtering and faceting over collections",
    status_code=status.HTTP_200_OK,
)
async def search_collections(request: Request, search_service: SearchServiceDep) -> Response:
    return await _search(RESOURCE_COLLECTIONS, request, search_service)


@router.get(
    "/items/{ids}",
    response_model=FetchResponse,
    summary="Fetch Items",
    description="Fetch items by comma-separated id list",
)
async def fetch_items(ids: str, request: Request, search_service: SearchServiceDep) -> Response:
    return await _fetch(RESOURCE_ITEMS, ids, request, search_service)


@router.get(
    "/collections/{ids}",
    response_model=FetchResponse,
    summary="Fetch Collections",
    description="Fetch collections by comma-separated id list",
)
async def fetch_collections(
    ids: str, request: Request, search_service: SearchServiceDep
) -> Response:
    return await _fetch(RESOURCE_COLLECTIONS, ids, request, search_service)
