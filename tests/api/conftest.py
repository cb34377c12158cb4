"""API test fixtures — FastAPI test client over the per-test SQLite database.

Invariants:
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - alice, bob and carol fixtures register users and return their bearer headers
"""

import pytest
from httpx import ASGITransport, AsyncClient

import messagely.infrastructure.database as db_module
from messagely.infrastructure.database import DatabaseSessionManager, get_db
from messagely.main import app
from tests.api.helpers import register


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(client) -> dict:
    return await register(client, "alice", "alice-pw")


@pytest.fixture
async def bob(client) -> dict:
    return await register(client, "bob", "bob-pw")


@pytest.fixture
async def carol(client) -> dict:
    return await register(client, "carol", "carol-pw")
