"""HTTP middleware: access logging, security headers, trailing-slash routing."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response
from starlette.types import ASGIApp, Receive, Scope, Send

access_logger = logging.getLogger("service_app.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}


def apply_security_headers(response: Response) -> None:
    for key, value in SECURITY_HEADERS.items():
        response.headers.setdefault(key, value)


def log_access(request: Request, status_code: int, duration_ms: float | None = None) -> None:
    if duration_ms is None:
        access_logger.info("%s %s %s", request.method, request.url.path, status_code)
        return
    access_logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        status_code,
        duration_ms,
    )


class TrailingSlashMiddleware:
    """Route ``/api/services/`` like ``/api/services`` instead of redirecting.

    Only the routing path is rewritten; ``raw_path`` keeps what the client sent.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope, path=path.rstrip("/") or "/")
        await self.app(scope, receive, send)


def install_middleware(app: FastAPI) -> None:
    # Unhandled errors skip this: the 500 handler applies headers and logs itself.
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        apply_security_headers(response)
        log_access(request, response.status_code, duration_ms)
        return response

    app.add_middleware(TrailingSlashMiddleware)
