"""Unit tests for rate limit middleware.

These tests verify per-key limiting on data routes, the separate budget for
project creation, pass-through when disabled, and the rate limit headers.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from simpledata.infrastructure.api.middleware.rate_limit_middleware import RateLimitMiddleware
from simpledata.infrastructure.api.middleware.rate_limit_storage import (
    RateLimitStorage,
    rate_limit_storage,
)

SETTINGS_PATH = "simpledata.infrastructure.api.middleware.rate_limit_middleware.get_settings"


def create_test_app() -> FastAPI:
    """Create a test FastAPI app with rate limit middleware."""
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware)

    @app.get("/api/{project_id}/{collection}")
    async def list_records(project_id: str, collection: str):
        return {"success": True, "data": []}

    @app.post("/projects")
    async def create_project():
        return {"success": True}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture
def mock_settings():
    settings = MagicMock()
    settings.rate_limit_enabled = True
    settings.rate_limit_per_minute = 5
    settings.rate_limit_burst = 2
    settings.project_create_limit_per_hour = 1
    settings.api_key_header = "x-api-key"
    return settings


@pytest.fixture
def client(mock_settings):
    with patch(SETTINGS_PATH, return_value=mock_settings):
        yield TestClient(create_test_app())


def test_rate_limit_headers_present(client):
    """Verify rate limit headers are added to the response."""
    response = client.get("/api/p1/users", headers={"x-api-key": "key-a"})

    assert response.status_code == 200
    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "1"
    assert "X-RateLimit-Reset" in response.headers


def test_rate_limit_exceeded(client):
    """Verify 429 is returned when the bucket is empty."""
    headers = {"x-api-key": "key-a"}
    assert client.get("/api/p1/users", headers=headers).status_code == 200
    assert client.get("/api/p1/users", headers=headers).status_code == 200

    response = client.get("/api/p1/users", headers=headers)

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "error": "Too many requests. Limit: 5 requests per minute.",
    }
    assert int(response.headers["Retry-After"]) >= 1
    assert response.headers["X-RateLimit-Remaining"] == "0"


def test_limits_are_per_api_key(client):
    for _ in range(2):
        client.get("/api/p1/users", headers={"x-api-key": "key-a"})

    assert client.get("/api/p1/users", headers={"x-api-key": "key-a"}).status_code == 429
    assert client.get("/api/p1/users", headers={"x-api-key": "key-b"}).status_code == 200


def test_project_creation_budget(client):
    assert client.post("/projects").status_code == 200

    response = client.post("/projects")

    assert response.status_code == 429
    assert response.json()["error"] == "Too many projects created. Try again later."


def test_unlimited_paths_pass_through(client):
    for _ in range(10):
        response = client.get("/health")
        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers


def test_disabled_rate_limiting(mock_settings):
    mock_settings.rate_limit_enabled = False
    with patch(SETTINGS_PATH, return_value=mock_settings):
        client = TestClient(create_test_app())
        for _ in range(10):
            response = client.get("/api/p1/users", headers={"x-api-key": "key-a"})
            assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers


def test_storage_refills_over_time():
    storage = RateLimitStorage()
    with patch("simpledata.infrastructure.api.middleware.rate_limit_storage.time") as mock_time:
        mock_time.time.return_value = 1000.0
        assert storage.consume("k", rate_per_minute=60, burst=1)[0] is True
        allowed, remaining, seconds = storage.consume("k", rate_per_minute=60, burst=1)
        assert (allowed, remaining) == (False, 0)
        assert seconds == pytest.approx(1.0)

        mock_time.time.return_value = 1001.0
        assert storage.consume("k", rate_per_minute=60, burst=1)[0] is True


def test_storage_reset():
    storage = RateLimitStorage()
    storage.consume("k", rate_per_minute=1, burst=1)
    assert storage.consume("k", rate_per_minute=1, burst=1)[0] is False

    storage.reset()

    assert storage.consume("k", rate_per_minute=1, burst=1)[0] is True


def test_global_storage_is_shared():
    rate_limit_storage.consume("shared", rate_per_minute=1, burst=1)
    assert rate_limit_storage.consume("shared", rate_per_minute=1, burst=1)[0] is False
