"""Static mock catalogs (users, services) and synthetic service records."""

from __future__ import annotations

import random
import re
from datetime import datetime
from typing import Any

from service_app.models import (
    CreateServiceRequest,
    MockService,
    MockUser,
    ServiceDetail,
    ServiceList,
    ServiceMetrics,
    UserList,
    utc_now,
)


class ServiceValidationError(ValueError):
    """Raised when a service draft is missing required fields."""


USERS: tuple[MockUser, ...] = (
    MockUser(id=1, name="John Doe", email="john@example.com", role="developer"),
    MockUser(id=2, name="Jane Smith", email="jane@example.com", role="designer"),
    MockUser(id=3, name="Bob Johnson", email="bob@example.com", role="manager"),
)

SERVICES: tuple[MockService, ...] = (
    MockService(
        id="user-service",
        name="User Service",
        status="running",
        version="1.2.0",
        last_deployed=datetime.fromisoformat("2024-01-15T10:30:00+00:00"),
    ),
    MockService(
        id="auth-service",
        name="Authentication Service",
        status="running",
        version="2.1.0",
        last_deployed=datetime.fromisoformat("2024-01-14T15:45:00+00:00"),
    ),
    MockService(
        id="notification-service",
        name="Notification Service",
        status="maintenance",
        version="1.5.2",
        last_deployed=datetime.fromisoformat("2024-01-13T09:20:00+00:00"),
    ),
)

SERVICE_DEPENDENCIES = ("database", "redis")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lower-case *name*, drop anything outside ``[a-z0-9 -]`` and hyphenate whitespace runs.

    >>> slugify("My Awesome Service")
    'my-awesome-service'
    >>> slugify("Service@#$%^&*()")
    'service'
    """
    cleaned = _NON_SLUG_CHARS.sub("", name.lower())
    return _WHITESPACE_RUN.sub("-", cleaned)


def list_users() -> UserList:
    return UserList(users=list(USERS), total=len(USERS))


def list_services() -> ServiceList:
    return ServiceList(services=list(SERVICES), total=len(SERVICES))


def describe_service(service_id: str, rng: random.Random | None = None) -> ServiceDetail:
    # Any id is accepted, the record is synthesized on demand.
    rng = rng or random.Random()
    return ServiceDetail(
        id=service_id,
        name=f"{service_id[:1].upper()}{service_id[1:]} Service",
        status="running",
        version="1.0.0",
        last_deployed=utc_now(),
        endpoints=[
            f"https://{service_id}.example.com/api",
            f"https://{service_id}.example.com/health",
        ],
        dependencies=list(SERVICE_DEPENDENCIES),
        metrics=ServiceMetrics(
            requests=rng.randrange(1000),
            errors=rng.randrange(10),
            response_time=rng.randrange(50, 250),
        ),
    )


def create_service_draft(payload: Any) -> MockService:
    """Build a deploying service record from a decoded request body.

    Presence is checked on the raw payload so falsy values of any type
    (``""``, ``0``, ``false``, ``null``) and non-object bodies are rejected alike.
    """
    if not isinstance(payload, dict) or not payload.get("name") or not payload.get("version"):
        raise ServiceValidationError("Name and version are required")
    body = CreateServiceRequest.model_validate(payload)
    return MockService(
        id=slugify(body.name),
        name=body.name,
        version=body.version,
        status="deploying",
        last_deployed=utc_now(),
    )
