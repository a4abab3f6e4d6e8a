from __future__ import annotations

from service_app.config import ServiceSettings
from service_app.git_info import GitCommandError

COMMIT_SHA = "0123456789abcdef0123456789abcdef01234567"
COMMIT_LINE = f"{COMMIT_SHA}|Jane Dev|jane@example.com|Mon Jan 15 10:30:00 2024 +0000|Fix: a|b"


def make_settings(**overrides) -> ServiceSettings:
    base = {
        "app_name": "test-app",
        "app_env": "test",
        "environment": "development",
        "port": 3000,
        "hostname": "test-host",
        "node_name": "node-a",
        "namespace": "team-a",
        "pod_ip": "10.0.0.7",
        "github_token": None,
        "github_owner": "acme",
        "github_repo": "widgets",
        "github_api_url": "https://api.github.test",
    }
    base.update(overrides)
    return ServiceSettings(_env_file=None, **base)


class FakeGitRunner:
    def __init__(self, outputs: dict[str, str] | None = None, error: Exception | None = None) -> None:
        self._outputs = outputs or {}
        self._error = error
        self.calls: list[list[str]] = []

    def run(self, args: list[str]) -> str:
        self.calls.append(args)
        if self._error is not None:
            raise self._error
        return self._outputs[args[0]]


def repo_runner() -> FakeGitRunner:
    return FakeGitRunner({"rev-parse": "main", "log": COMMIT_LINE})


def no_repo_runner() -> FakeGitRunner:
    return FakeGitRunner(error=GitCommandError("fatal: not a git repository"))
