"""
Tests for the /health endpoint and the API root.

All tests run without a live MongoDB (db is mocked as disconnected in conftest).
"""

import pytest


@pytest.mark.asyncio
async def test_health_returns_200(client):
    response = await client.get("/health")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_response_schema(client):
    data = (await client.get("/health")).json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["environment"] == "test"


@pytest.mark.asyncio
async def test_health_reports_disconnected_db(client):
    """With no Mongo client the API still answers, reporting the DB as down."""
    data = (await client.get("/health")).json()
    assert data["database"] == "disconnected"


@pytest.mark.asyncio
async def test_root_metadata(client):
    data = (await client.get("/")).json()
    assert data["name"] == "FishSpot API"
    assert data["status"] == "running"


@pytest.mark.asyncio
async def test_health_includes_region(client):
    region = (await client.get("/health")).json()["region"]
    assert (region["north"], region["south"], region["west"], region["east"]) == (13.0, 9.5, 123.5, 126.5)


@pytest.mark.asyncio
async def test_health_connected_when_ping_succeeds(client):
    from unittest.mock import AsyncMock, MagicMock

    import fishspot.core.database as db_module

    fake_client = MagicMock()
    fake_client.admin.command = AsyncMock(return_value={"ok": 1})
    db_module.db_client.client = fake_client  # restored by the mock_db fixture
    data = (await client.get("/health")).json()
    assert data["database"] == "connected"
