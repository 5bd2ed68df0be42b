import asyncio

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import app as app_module


class FakeMotorClient:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeMotorClient()
    monkeypatch.setattr(app_module, "create_client", lambda: client)
    return client


def test_health_reports_connected_database(monkeypatch, fake_client):
    async def connect(client):
        return client

    monkeypatch.setattr(app_module, "connect", connect)

    with TestClient(app_module.app) as http:
        response = http.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert "timestamp" in data
    assert fake_client.closed


def test_health_reports_pending_connection(monkeypatch, fake_client):
    async def connect(client):
        await asyncio.sleep(60)
        return client

    monkeypatch.setattr(app_module, "connect", connect)

    with TestClient(app_module.app) as http:
        response = http.get("/api/health")
        assert app_module.app.state.db_connect_task.done() is False

    assert response.status_code == 200
    assert response.json()["database"] == "connecting"
    assert fake_client.closed


def test_health_reports_failed_connection(monkeypatch, fake_client, caplog):
    async def connect(client):
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(app_module, "connect", connect)

    with TestClient(app_module.app) as http:
        response = http.get("/api/health")

    assert response.status_code == 503
    assert response.json() == {
        "status": "unhealthy",
        "database": "unavailable",
        "timestamp": response.json()["timestamp"],
    }
    assert any("no servers available" in r.getMessage() for r in caplog.records)
