"""Health and status payload aggregation."""

from __future__ import annotations

import logging
import time

from service_app import runtime
from service_app.config import ServiceSettings
from service_app.git_info import GitInspector
from service_app.models import (
    DegradedService,
    HealthFailure,
    HealthReport,
    PlacementInfo,
    ServiceIdentity,
    StatusFailure,
    StatusReport,
)

logger = logging.getLogger(__name__)


class StatusAggregator:
    def __init__(self, settings: ServiceSettings, inspector: GitInspector) -> None:
        self._settings = settings
        self._inspector = inspector

    def placement(self) -> PlacementInfo:
        s = self._settings
        return PlacementInfo(
            hostname=s.resolved_hostname,
            pod_name=s.pod_name,
            node_name=s.node_name,
            namespace=s.namespace,
            pod_ip=s.pod_ip,
        )

    def build_health_payload(self) -> tuple[int, HealthReport | HealthFailure]:
        try:
            local_git = self._inspector.get_local_info()
            report = HealthReport(
                uptime=runtime.uptime_seconds(),
                memory=runtime.memory_usage(),
                version=runtime.python_version(),
                environment=self._settings.environment,
                git=local_git,
            )
        except Exception:
            logger.exception("Health check error")
            return 500, HealthFailure(error="Failed to get health information")
        return 200, report

    async def build_status_payload(self) -> tuple[int, StatusReport | StatusFailure]:
        start = time.perf_counter()
        s = self._settings
        try:
            git = await self._inspector.get_all_info()
            service = ServiceIdentity(
                name=s.app_name,
                version=s.app_version,
                status="running",
                uptime=runtime.uptime_seconds(),
                environment=s.environment,
                port=s.port,
            )
            report = StatusReport(
                service=service,
                pod=self.placement(),
                system=runtime.system_info(),
                git=git,
                response_time=int((time.perf_counter() - start) * 1000),
            )
        except Exception:
            logger.exception("API status error")
            return 500, StatusFailure(
                service=DegradedService(name=s.app_name),
                error="Failed to get API status information",
            )
        return 200, report
