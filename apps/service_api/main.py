"""FastAPI entrypoint for the Backstage service template API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from service_app.config import ServiceSettings, get_settings
from service_app.errors import register_exception_handlers
from service_app.git_info import GitInspector
from service_app.logging_config import setup_logging
from service_app.middleware import install_middleware
from service_app.routes.catalog import router as catalog_router
from service_app.routes.system import router as system_router
from service_app.status import StatusAggregator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: ServiceSettings = app.state.settings
    logger.info("Server is running on port %s", settings.port)
    logger.info("Health check available at http://localhost:%s/health", settings.port)
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app(
    settings: ServiceSettings | None = None,
    inspector: GitInspector | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    inspector = inspector or GitInspector(settings)
    app.state.settings = settings
    app.state.status_aggregator = StatusAggregator(settings, inspector)

    install_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app, settings)
    app.include_router(system_router)
    app.include_router(catalog_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
