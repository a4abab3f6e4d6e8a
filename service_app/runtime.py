"""Process/runtime metrics via psutil."""

from __future__ import annotations

import platform
import sys
import time

import psutil

from service_app.models import CPUUsage, SystemInfo

_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    return time.monotonic() - _STARTED_AT


def memory_usage() -> dict[str, int]:
    """Memory counters of the current process in bytes (fields vary by platform)."""
    return {k: int(v) for k, v in psutil.Process().memory_info()._asdict().items()}


def cpu_usage() -> CPUUsage:
    times = psutil.Process().cpu_times()
    return CPUUsage(user=times.user, system=times.system)


def python_version() -> str:
    return platform.python_version()


def system_info() -> SystemInfo:
    return SystemInfo(
        python_version=python_version(),
        platform=sys.platform,
        arch=platform.machine(),
        memory=memory_usage(),
        cpu_usage=cpu_usage(),
    )
