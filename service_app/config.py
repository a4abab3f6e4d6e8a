"""Service configuration for the Backstage service template API."""

from __future__ import annotations

import socket
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    # No env prefix: placement fields are injected by the Kubernetes
    # downward API as HOSTNAME, NODE_NAME, NAMESPACE and POD_IP.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "backstage-python-app"
    app_env: str = "development"
    app_version: str = "1.0.0"
    environment: str = "development"
    port: int = 3000
    log_level: str = "INFO"

    hostname: str | None = None
    node_name: str = "local"
    namespace: str = "default"
    pod_ip: str = "127.0.0.1"

    github_token: str | None = Field(default=None)
    github_owner: str = "hexspark-digital"
    github_repo: str | None = None
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = 10.0
    git_timeout_seconds: float = 5.0

    cors_allow_origins: str = "*"

    @property
    def resolved_hostname(self) -> str:
        return self.hostname or socket.gethostname()

    @property
    def pod_name(self) -> str:
        return self.hostname or "local"

    @property
    def resolved_github_repo(self) -> str:
        return self.github_repo or self.app_name

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> ServiceSettings:
    return ServiceSettings()
