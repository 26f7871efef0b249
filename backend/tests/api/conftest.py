"""API fixtures — the real app over the per-test SQLite database.

Invariants:
    - get_db_manager is overridden, so no PostgreSQL pool is ever created
    - The lifespan does not run under ASGITransport; the module-level
      db_manager is patched for the readiness probe instead
"""

import pytest
from httpx import ASGITransport, AsyncClient

from registrar.infrastructure import database
from registrar.infrastructure.database import get_db_manager
from registrar.main import app


@pytest.fixture
async def client(db_manager, monkeypatch):
    monkeypatch.setattr(database, "db_manager", db_manager)
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
