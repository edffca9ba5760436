"""Tests for the search error taxonomy."""

import json

import pytest
from starlette.requests import Request

from catalog_search.core.exceptions import (
    BadRequestError,
    InternalServerError,
    NotAcceptableError,
    NotFoundError,
    RateLimitExceededError,
    SearchError,
    ServiceUnavailableError,
    UnauthorizedError,
    search_error_handler,
)


@pytest.mark.parametrize(
    ("error_class", "status_code"),
    [
        (BadRequestError, 400),
        (UnauthorizedError, 401),
        (RateLimitExceededError, 403),
        (NotFoundError, 404),
        (NotAcceptableError, 406),
        (InternalServerError, 500),
        (ServiceUnavailableError, 503),
    ],
)
def test_status_codes(error_class: type[SearchError], status_code: int):
    error = error_class("boom")
    assert isinstance(error, SearchError)
    assert error.status_code == status_code
    assert str(error) == "boom"


def test_message_defaults_to_class_name():
    assert str(NotFoundError()) == "NotFoundError"


def _request(query_string: bytes = b"") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/v1/items",
            "headers": [],
            "query_string": query_string,
        }
    )


@pytest.mark.asyncio
async def test_search_error_handler_renders_message_and_type():
    request = _request()

    response = await search_error_handler(request, BadRequestError("Invalid field(s): x"))

    assert response.status_code == 400
    assert json.loads(response.body) == {
        "message": "Invalid field(s): x",
        "type": "BadRequestError",
    }


@pytest.mark.asyncio
async def test_search_error_handler_wraps_jsonp_callback():
    request = _request(b"q=x&callback=handle_results")

    response = await search_error_handler(request, NotFoundError("No items found"))

    assert response.status_code == 404
    assert response.media_type == "application/javascript"
    assert response.body.decode() == (
        'handle_results({"message": "No items found", "type": "NotFoundError"})'
    )


@pytest.mark.asyncio
async def test_search_error_handler_ignores_invalid_callback():
    request = _request(b"callback=alert(1)//")

    response = await search_error_handler(request, BadRequestError("Invalid callback parameter"))

    assert response.status_code == 400
    assert response.media_type == "application/json"
