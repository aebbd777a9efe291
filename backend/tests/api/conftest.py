"""API test fixtures — FastAPI test client over the in-memory database.

Invariants:
    - get_db overridden to use the test session factory
    - get_cipher overridden with the deterministic FakeCipher
"""

import pytest
from httpx import ASGITransport, AsyncClient

from calnotes.api.dependencies import get_cipher
from calnotes.infrastructure.database import get_db
from calnotes.main import app


@pytest.fixture
async def client(test_session_factory, cipher):
    """FastAPI test client with DB and cipher dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cipher] = lambda: cipher

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()