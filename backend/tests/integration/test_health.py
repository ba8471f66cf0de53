"""Tests for the health check endpoint."""

import pytest


@pytest.mark.asyncio
async def test_health_check_returns_200(client):
    """Health endpoint should return 200 with status, version, environment and database."""
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "up"
    assert "version" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/v1/nope")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not Found"
