"""Domain exceptions and the handlers that render them with request_id."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


class ProjectHubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(ProjectHubError):
    """Bad status value, malformed body or invalid reference."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ProjectHubError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ProjectHubError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ProjectHubError):
    status_code = status.HTTP_409_CONFLICT


class DependencyFailureError(ProjectHubError):
    """An external dependency (storage, mail queue) failed on a primary operation."""

    status_code = status.HTTP_502_BAD_GATEWAY


def _error_response(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(ProjectHubError)
    async def projecthub_exception_handler(request: Request, exc: ProjectHubError) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed bodies are reported as invalid input, same as service-level checks
        return _error_response(status.HTTP_400_BAD_REQUEST, jsonable_encoder(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
