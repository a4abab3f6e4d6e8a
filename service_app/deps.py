"""Dependency accessors for route handlers.

Components are built once in ``create_app`` and kept on ``app.state``.
"""

from __future__ import annotations

from fastapi import Request

from service_app.config import ServiceSettings
from service_app.status import StatusAggregator


def get_app_settings(request: Request) -> ServiceSettings:
    return request.app.state.settings


def get_status_aggregator(request: Request) -> StatusAggregator:
    return request.app.state.status_aggregator
