"""Exception handlers shaping error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from service_app.catalog import ServiceValidationError
from service_app.config import ServiceSettings
from service_app.middleware import SECURITY_HEADERS, log_access
from service_app.payloads import InvalidJSONError

logger = logging.getLogger(__name__)


def _request_url(request: Request) -> str:
    """Path as sent by the client (still percent-encoded), plus the query string."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


def not_found_response(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Endpoint not found",
            "path": _request_url(request),
            "method": request.method,
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Known path with an unsupported verb is reported as an unknown endpoint.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return not_found_response(request)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def invalid_json_handler(request: Request, exc: InvalidJSONError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid JSON format"},
    )


async def service_validation_handler(request: Request, exc: ServiceValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


def unhandled_exception_handler_factory(settings: ServiceSettings):
    async def _handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception in %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        # Runs outside the http middleware stack, so headers and the access
        # line are applied here.
        log_access(request, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Something went wrong!",
                "message": str(exc) if settings.is_development else "Internal server error",
            },
            headers=SECURITY_HEADERS,
        )

    return _handler


def register_exception_handlers(app: FastAPI, settings: ServiceSettings) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(InvalidJSONError, invalid_json_handler)
    app.add_exception_handler(ServiceValidationError, service_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler_factory(settings))
