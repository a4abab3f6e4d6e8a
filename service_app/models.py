"""Request/response models for the service API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenAPIModel(APIModel):
    model_config = ConfigDict(frozen=True)


# --- catalog ---------------------------------------------------------------

ServiceStatus = Literal["running", "maintenance", "deploying", "error"]


class MockUser(FrozenAPIModel):
    id: int
    name: str
    email: str
    role: str


class MockService(FrozenAPIModel):
    id: str
    name: str
    status: ServiceStatus
    version: str
    last_deployed: datetime


class ServiceMetrics(APIModel):
    requests: int
    errors: int
    response_time: int


class ServiceDetail(MockService):
    endpoints: list[str]
    dependencies: list[str]
    metrics: ServiceMetrics


class UserList(APIModel):
    users: list[MockUser]
    total: int
    timestamp: datetime = Field(default_factory=utc_now)


class ServiceList(APIModel):
    services: list[MockService]
    total: int
    timestamp: datetime = Field(default_factory=utc_now)


class CreateServiceRequest(APIModel):
    """Body of ``POST /api/services``; unknown fields are ignored.

    Non-string JSON values are kept in their JSON text form (``2`` -> ``"2"``).
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    version: str | None = None

    @field_validator("name", "version", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)


# --- git -------------------------------------------------------------------


class CommitInfo(APIModel):
    hash: str
    full_hash: str
    author: str
    email: str
    date: str
    message: str


class LocalGitInfo(APIModel):
    branch: str
    last_commit: CommitInfo


class RepoMetadata(APIModel):
    name: str
    full_name: str
    description: str | None = None
    url: str
    default_branch: str
    stars: int
    forks: int
    open_issues: int
    language: str | None = None
    updated_at: str | None = None
    created_at: str | None = None


class BranchSummary(APIModel):
    name: str
    protected: bool
    last_commit: str


class RemoteCommitInfo(CommitInfo):
    url: str | None = None


class GitHubRepoInfo(APIModel):
    repo: RepoMetadata
    branches: list[BranchSummary]
    latest_commit: RemoteCommitInfo | None = None


class WorkflowRun(APIModel):
    id: int
    name: str | None = None
    status: str | None = None
    conclusion: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    url: str | None = None
    branch: str | None = None
    commit: str


class GitInfo(APIModel):
    local: LocalGitInfo | None = None
    github: GitHubRepoInfo | None = None
    workflows: list[WorkflowRun] | None = None


# --- status ----------------------------------------------------------------


class ServiceIdentity(APIModel):
    name: str
    version: str
    status: str
    uptime: float
    timestamp: datetime = Field(default_factory=utc_now)
    environment: str
    port: int


class PlacementInfo(APIModel):
    hostname: str
    pod_name: str
    node_name: str
    namespace: str
    pod_ip: str = Field(alias="podIP")


class CPUUsage(APIModel):
    user: float
    system: float


class SystemInfo(APIModel):
    python_version: str
    platform: str
    arch: str
    memory: dict[str, int]
    cpu_usage: CPUUsage


class StatusEndpoints(APIModel):
    health: str = "/health"
    api_status: str = "/api-status"
    users: str = "/api/users"
    services: str = "/api/services"


class EndpointIndex(StatusEndpoints):
    api: str = "/api"


class HealthReport(APIModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    timestamp: datetime = Field(default_factory=utc_now)
    memory: dict[str, int]
    version: str
    environment: str
    git: LocalGitInfo | None = None


class HealthFailure(APIModel):
    status: Literal["unhealthy"] = "unhealthy"
    error: str
    timestamp: datetime = Field(default_factory=utc_now)


class StatusReport(APIModel):
    service: ServiceIdentity
    pod: PlacementInfo
    system: SystemInfo
    git: GitInfo
    endpoints: StatusEndpoints = Field(default_factory=StatusEndpoints)
    response_time: int


class DegradedService(APIModel):
    name: str
    status: Literal["error"] = "error"
    timestamp: datetime = Field(default_factory=utc_now)


class StatusFailure(APIModel):
    service: DegradedService
    error: str


# --- static pages ----------------------------------------------------------


class WelcomePage(APIModel):
    message: str
    environment: str
    version: str
    timestamp: datetime = Field(default_factory=utc_now)
    hostname: str
    pod_name: str
    node_name: str
    namespace: str
    endpoints: EndpointIndex = Field(default_factory=EndpointIndex)


class APIInfo(APIModel):
    message: str = "API is running"
    version: str = "1.0.0"
    documentation: str = "https://github.com/backstage/backstage"
