"""
Tests for app-level behavior: health, error envelope, request ids.
"""

import pytest
from httpx import AsyncClient

from cultural_spa.api.errors import flatten_validation_errors


@pytest.mark.asyncio
async def test_health_reports_dataset_stamp(client: AsyncClient, seeded):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["datasetUpdatedAt"] is not None


@pytest.mark.asyncio
async def test_health_before_seed(client: AsyncClient):
    response = await client.get("/health")
    assert response.json()["datasetUpdatedAt"] is None


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_malformed_json_body(client: AsyncClient):
    response = await client.post(
        "/api/users/login",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["formErrors"]
    assert error["fieldErrors"] == {}


def test_flatten_validation_errors():
    errors = [
        {"loc": ("body", "username"), "msg": "too short"},
        {"loc": ("body", "username"), "msg": "bad chars"},
        {"loc": ("query", "limit"), "msg": "too big"},
        {"loc": ("body",), "msg": "not an object"},
        {"loc": ("body", 1), "msg": "JSON decode error", "type": "json_invalid"},
    ]
    assert flatten_validation_errors(errors) == {
        "formErrors": ["not an object", "JSON decode error"],
        "fieldErrors": {"username": ["too short", "bad chars"], "limit": ["too big"]},
    }
