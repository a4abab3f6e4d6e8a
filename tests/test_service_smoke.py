from __future__ import annotations

import logging

from helpers import COMMIT_SHA, make_settings, repo_runner


def test_welcome_page(client) -> None:
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["message"] == "Welcome to test-app"
    assert data["environment"] == "test"
    assert data["version"] == "1.0.0"
    assert data["hostname"] == "test-host"
    assert data["podName"] == "test-host"
    assert data["nodeName"] == "node-a"
    assert data["namespace"] == "team-a"
    assert data["endpoints"] == {
        "health": "/health",
        "apiStatus": "/api-status",
        "api": "/api",
        "users": "/api/users",
        "services": "/api/services",
    }
    assert data["timestamp"].endswith("Z")


def test_welcome_page_local_fallbacks(build_client) -> None:
    client = build_client(make_settings(hostname=None))
    data = client.get("/").json()
    assert data["podName"] == "local"
    assert data["hostname"]


def test_api_info(client) -> None:
    r = client.get("/api")
    assert r.status_code == 200
    assert r.json() == {
        "message": "API is running",
        "version": "1.0.0",
        "documentation": "https://github.com/backstage/backstage",
    }


def test_health_without_repo_or_token(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "healthy"
    assert data["git"] is None
    assert data["environment"] == "development"
    assert data["uptime"] >= 0
    assert data["memory"]["rss"] > 0
    assert data["version"].count(".") == 2


def test_health_includes_local_git(build_client) -> None:
    client = build_client(runner=repo_runner())
    data = client.get("/health").json()
    assert data["git"]["branch"] == "main"
    assert data["git"]["lastCommit"]["hash"] == COMMIT_SHA[:7]
    assert data["git"]["lastCommit"]["fullHash"] == COMMIT_SHA


def test_api_status(build_client) -> None:
    client = build_client(runner=repo_runner())
    r = client.get("/api-status")
    assert r.status_code == 200
    data = r.json()
    assert data["service"]["name"] == "test-app"
    assert data["service"]["status"] == "running"
    assert data["service"]["port"] == 3000
    assert data["pod"] == {
        "hostname": "test-host",
        "podName": "test-host",
        "nodeName": "node-a",
        "namespace": "team-a",
        "podIP": "10.0.0.7",
    }
    assert {"pythonVersion", "platform", "arch", "memory", "cpuUsage"} <= set(data["system"])
    assert data["git"]["local"]["branch"] == "main"
    assert data["git"]["github"] is None
    assert data["git"]["workflows"] is None
    assert data["endpoints"] == {
        "health": "/health",
        "apiStatus": "/api-status",
        "users": "/api/users",
        "services": "/api/services",
    }
    assert isinstance(data["responseTime"], int)
    assert data["responseTime"] >= 0


def test_users_listing_is_stable(client) -> None:
    first = client.get("/api/users")
    second = client.get("/api/users")
    assert first.status_code == 200
    assert first.json()["total"] == 3
    assert first.json()["users"] == second.json()["users"]
    assert first.json()["users"][0] == {
        "id": 1,
        "name": "John Doe",
        "email": "john@example.com",
        "role": "developer",
    }


def test_services_listing_is_stable(client) -> None:
    first = client.get("/api/services").json()
    second = client.get("/api/services").json()
    assert first["total"] == 3
    assert first["services"] == second["services"]
    assert [s["id"] for s in first["services"]] == [
        "user-service",
        "auth-service",
        "notification-service",
    ]
    assert first["services"][2]["status"] == "maintenance"
    assert first["services"][0]["lastDeployed"] == "2024-01-15T10:30:00Z"


def test_service_detail(client) -> None:
    r = client.get("/api/services/payments")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == "payments"
    assert data["name"] == "Payments Service"
    assert data["status"] == "running"
    assert data["version"] == "1.0.0"
    assert data["endpoints"] == [
        "https://payments.example.com/api",
        "https://payments.example.com/health",
    ]
    assert data["dependencies"] == ["database", "redis"]
    assert 0 <= data["metrics"]["requests"] < 1000
    assert 0 <= data["metrics"]["errors"] < 10
    assert 50 <= data["metrics"]["responseTime"] < 250


def test_service_detail_accepts_any_id(client) -> None:
    for service_id in ("user-service", "x", "weird_id.v2", "123"):
        r = client.get(f"/api/services/{service_id}")
        assert r.status_code == 200
        assert r.json()["id"] == service_id


def test_create_service(client) -> None:
    r = client.post(
        "/api/services",
        json={"name": "My Awesome Service", "version": "2.0.0", "owner": "ignored"},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["id"] == "my-awesome-service"
    assert data["name"] == "My Awesome Service"
    assert data["version"] == "2.0.0"
    assert data["status"] == "deploying"
    assert "lastDeployed" in data
    assert "owner" not in data


def test_create_service_id_is_stable(client) -> None:
    ids = {
        client.post(
            "/api/services", json={"name": "Consistent Test Service", "version": "1.0.0"}
        ).json()["id"]
        for _ in range(3)
    }
    assert ids == {"consistent-test-service"}


def test_security_headers_and_access_log(client, caplog) -> None:
    caplog.set_level(logging.INFO, logger="service_app.access")
    r = client.get("/api")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["Referrer-Policy"] == "no-referrer"
    access = [rec.getMessage() for rec in caplog.records if rec.name == "service_app.access"]
    assert access[-1].startswith("GET /api 200 ")
