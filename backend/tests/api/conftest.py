"""API test fixtures — FastAPI test client wired to the per-test database.

Invariants:
    - get_db dependency overridden to use the test engine
    - db_manager patched so readiness probes hit the test engine
    - Overrides are removed after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from roster.config import Settings, get_settings
from roster.infrastructure.database import get_db, DatabaseSessionManager
import roster.infrastructure.database as db_module
from roster.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(users_per_page=20)

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
