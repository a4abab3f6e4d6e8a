"""Welcome, health and status endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from service_app.config import ServiceSettings
from service_app.deps import get_app_settings, get_status_aggregator
from service_app.models import APIInfo, WelcomePage
from service_app.status import StatusAggregator

router = APIRouter()


def _json(status_code: int, model) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump(mode="json", by_alias=True))


@router.get("/", response_model=WelcomePage)
def welcome(settings: ServiceSettings = Depends(get_app_settings)) -> WelcomePage:
    return WelcomePage(
        message=f"Welcome to {settings.app_name}",
        environment=settings.app_env,
        version=settings.app_version,
        hostname=settings.resolved_hostname,
        pod_name=settings.pod_name,
        node_name=settings.node_name,
        namespace=settings.namespace,
    )


@router.get("/health")
def health(aggregator: StatusAggregator = Depends(get_status_aggregator)) -> JSONResponse:
    status_code, payload = aggregator.build_health_payload()
    return _json(status_code, payload)


@router.get("/api", response_model=APIInfo)
def api_info() -> APIInfo:
    return APIInfo()


@router.get("/api-status")
async def api_status(aggregator: StatusAggregator = Depends(get_status_aggregator)) -> JSONResponse:
    status_code, payload = await aggregator.build_status_payload()
    return _json(status_code, payload)
