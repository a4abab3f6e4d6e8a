"""Local git and GitHub repository inspection.

Every public method degrades to ``None`` on failure: git metadata is optional
enrichment and must never fail the request that asked for it.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from service_app.config import ServiceSettings
from service_app.models import (
    BranchSummary,
    CommitInfo,
    GitHubRepoInfo,
    GitInfo,
    LocalGitInfo,
    RemoteCommitInfo,
    RepoMetadata,
    WorkflowRun,
)

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7
MAX_WORKFLOW_RUNS = 5
LAST_COMMIT_FORMAT = "%H|%an|%ae|%ad|%s"


class GitCommandError(RuntimeError):
    pass


class GitCommandRunner(Protocol):
    def run(self, args: list[str]) -> str: ...


class SubprocessGitRunner:
    """Runs ``git`` in a child process and returns its stripped stdout."""

    def __init__(self, timeout_seconds: float | None = None, cwd: str | None = None) -> None:
        self._timeout_seconds = timeout_seconds or None
        self._cwd = cwd

    def run(self, args: list[str]) -> str:
        try:
            completed = subprocess.run(
                ["git", *args],
                check=True,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
                cwd=self._cwd,
            )
        except FileNotFoundError as exc:
            raise GitCommandError("git executable not found") from exc
        except subprocess.CalledProcessError as exc:
            raise GitCommandError(
                (exc.stderr or "").strip() or f"git exited with status {exc.returncode}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GitCommandError(f"git timed out after {exc.timeout}s") from exc
        return completed.stdout.strip()


def short_hash(sha: str) -> str:
    return sha[:SHORT_HASH_LENGTH]


def parse_last_commit(line: str) -> CommitInfo:
    parts = line.split("|", 4)
    if len(parts) != 5:
        raise GitCommandError(f"Unexpected git log output: {line!r}")
    full_hash, author, email, date, message = parts
    return CommitInfo(
        hash=short_hash(full_hash),
        full_hash=full_hash,
        author=author,
        email=email,
        date=date,
        message=message,
    )


class GitInspector:
    def __init__(
        self,
        settings: ServiceSettings,
        runner: GitCommandRunner | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = settings.github_token
        self._owner = settings.github_owner
        self._repo = settings.resolved_github_repo
        self._api_url = settings.github_api_url.rstrip("/")
        self._timeout_seconds = settings.github_timeout_seconds
        self._runner = runner or SubprocessGitRunner(settings.git_timeout_seconds)
        self._client = client

    @property
    def remote_enabled(self) -> bool:
        return bool(self._token)

    @property
    def repo_path(self) -> str:
        return f"/repos/{self._owner}/{self._repo}"

    def get_local_info(self) -> LocalGitInfo | None:
        try:
            branch = self._runner.run(["rev-parse", "--abbrev-ref", "HEAD"])
            last_commit = self._runner.run(["log", "-1", f"--pretty=format:{LAST_COMMIT_FORMAT}"])
            return LocalGitInfo(branch=branch, last_commit=parse_last_commit(last_commit))
        except (GitCommandError, OSError, ValidationError) as exc:
            logger.warning("Could not get local git info: %s", exc)
            return None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = await client.get(
            f"{self._api_url}{path}", headers=self._headers(), params=params
        )
        response.raise_for_status()
        return response.json()

    async def _with_client(self, fetch):
        own_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_seconds)
            own_client = True
        try:
            return await fetch(client)
        finally:
            if own_client:
                await client.aclose()

    async def _fetch_repo_info(self, client: httpx.AsyncClient) -> GitHubRepoInfo:
        repo, branches = await asyncio.gather(
            self._get_json(client, self.repo_path),
            self._get_json(client, f"{self.repo_path}/branches"),
        )
        default_branch = next(
            (b for b in branches if b["name"] == repo["default_branch"]), None
        )
        main_branch = next((b for b in branches if b["name"] == "main"), default_branch)

        latest_commit = None
        if main_branch is not None:
            commit = await self._get_json(
                client, f"{self.repo_path}/commits/{main_branch['commit']['sha']}"
            )
            author = commit["commit"]["author"]
            latest_commit = RemoteCommitInfo(
                hash=short_hash(commit["sha"]),
                full_hash=commit["sha"],
                author=author["name"],
                email=author["email"],
                date=author["date"],
                message=commit["commit"]["message"],
                url=commit.get("html_url"),
            )

        return GitHubRepoInfo(
            repo=RepoMetadata(
                name=repo["name"],
                full_name=repo["full_name"],
                description=repo.get("description"),
                url=repo["html_url"],
                default_branch=repo["default_branch"],
                stars=repo.get("stargazers_count", 0),
                forks=repo.get("forks_count", 0),
                open_issues=repo.get("open_issues_count", 0),
                language=repo.get("language"),
                updated_at=repo.get("updated_at"),
                created_at=repo.get("created_at"),
            ),
            branches=[
                BranchSummary(
                    name=b["name"],
                    protected=bool(b.get("protected", False)),
                    last_commit=short_hash(b["commit"]["sha"]),
                )
                for b in branches
            ],
            latest_commit=latest_commit,
        )

    async def _fetch_workflow_runs(self, client: httpx.AsyncClient) -> list[WorkflowRun]:
        payload = await self._get_json(
            client,
            f"{self.repo_path}/actions/runs",
            params={"per_page": MAX_WORKFLOW_RUNS},
        )
        return [
            WorkflowRun(
                id=run["id"],
                name=run.get("name"),
                status=run.get("status"),
                conclusion=run.get("conclusion"),
                created_at=run.get("created_at"),
                updated_at=run.get("updated_at"),
                url=run.get("html_url"),
                branch=run.get("head_branch"),
                commit=short_hash(run["head_sha"]),
            )
            for run in payload["workflow_runs"][:MAX_WORKFLOW_RUNS]
        ]

    async def get_remote_repo_info(self) -> GitHubRepoInfo | None:
        if not self.remote_enabled:
            logger.warning("GITHUB_TOKEN not provided, skipping GitHub API calls")
            return None
        try:
            return await self._with_client(self._fetch_repo_info)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.error("Error fetching GitHub repo info: %s", exc)
            return None

    async def get_workflow_runs(self) -> list[WorkflowRun] | None:
        if not self.remote_enabled:
            return None
        try:
            return await self._with_client(self._fetch_workflow_runs)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.error("Error fetching GitHub workflow status: %s", exc)
            return None

    async def get_all_info(self) -> GitInfo:
        local, github, workflows = await asyncio.gather(
            asyncio.to_thread(self.get_local_info),
            self.get_remote_repo_info(),
            self.get_workflow_runs(),
        )
        return GitInfo(local=local, github=github, workflows=workflows)
