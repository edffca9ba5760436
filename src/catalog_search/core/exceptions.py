"""Search error taxonomy and exception handlers."""

from fastapi import HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from catalog_search.core.logging import get_logger
from catalog_search.core.responses import is_valid_callback, jsonp_response

logger = get_logger(__name__)


class SearchError(Exception):
    """Base search exception carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)


class BadRequestError(SearchError):
    """Invalid parameter, field or facet request."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(SearchError):
    status_code = status.HTTP_401_UNAUTHORIZED


class RateLimitExceededError(SearchError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(SearchError):
    """Requested documents or resource not found."""

    status_code = status.HTTP_404_NOT_FOUND


class NotAcceptableError(SearchError):
    status_code = status.HTTP_406_NOT_ACCEPTABLE


class InternalServerError(SearchError):
    """Unexpected engine or repository failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ServiceUnavailableError(SearchError):
    """Search engine or repository could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def search_error_handler(request: Request, exc: SearchError) -> Response:
    """Handle search errors.

    Requests carrying a valid ``callback`` get the error body as JSONP.

    Args:
        request: The incoming request.
        exc: The exception that was raised.

    Returns:
        Response: Error response with the status carried by the exception.
    """
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Search error: %s", exc.message, exc_info=True)
    else:
        logger.info("Rejected request %s: %s", request.url.path, exc.message)
    content = {"message": exc.message, "type": exc.__class__.__name__}
    callback = request.query_params.get("callback")
    if callback and is_valid_callback(callback):
        return jsonp_response(callback, content, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions.

    Args:
        request: The incoming request.
        exc: The HTTP exception that was raised.

    Returns:
        JSONResponse: Error response.
    """
    logger.warning("HTTP error %s: %s", exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse: Error response.
    """
    logger.error("Unhandled error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "type": InternalServerError.__name__},
    )
