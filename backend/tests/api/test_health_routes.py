"""Health routes — liveness always up, readiness follows the database.

Tests:
    - GET /api/v1/health/ → 200
    - GET /api/v1/health/ready → 200 with a reachable database
    - GET /api/v1/health/ready → 503 when no database is configured
"""

from registrar.infrastructure import database


async def test_liveness(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 503
    assert resp.json()["reason"] == "database_unavailable"
