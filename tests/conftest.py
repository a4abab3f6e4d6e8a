from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

# Avoid collisions with any preloaded `apps` package from other repos/environments.
apps_mod = sys.modules.get("apps")
if apps_mod is not None:
    mod_file = str(getattr(apps_mod, "__file__", ""))
    if root_str not in mod_file:
        sys.modules.pop("apps", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from helpers import make_settings, no_repo_runner  # noqa: E402


@pytest.fixture
def build_client():
    """Build a TestClient around an isolated app; git defaults to 'not a repository'."""
    from apps.service_api.main import create_app
    from service_app.git_info import GitInspector

    def _build(settings=None, runner=None, http_client=None, raise_server_exceptions=True) -> TestClient:
        settings = settings or make_settings()
        inspector = GitInspector(settings, runner=runner or no_repo_runner(), client=http_client)
        app = create_app(settings, inspector=inspector)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _build


@pytest.fixture
def client(build_client) -> TestClient:
    return build_client()
