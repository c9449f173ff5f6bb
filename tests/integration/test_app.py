"""Tests for app-level concerns: error envelope, request ids and health."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.taskflow import main

pytestmark = pytest.mark.integration


async def test_error_carries_request_id_from_header(client: AsyncClient) -> None:
    request_id = str(uuid4())

    response = await client.get("/api/v1/users/me", headers={"X-Request-ID": request_id})

    assert response.status_code == 401
    assert response.json()["request_id"] == request_id
    assert response.headers["X-Request-ID"] == request_id


async def test_error_envelope_shape(client: AsyncClient) -> None:
    response = await client.get("/api/v1/users/me")

    assert set(response.json()) == {"statusCode", "error", "message", "request_id"}
    assert response.json()["error"] == "UNAUTHORIZED"


async def test_unknown_route_uses_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_health(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "_health_cache", None)

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"
    assert response.json()["redis"] == "not_configured"
