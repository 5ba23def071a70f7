"""Fixtures for API tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from stockbook.api.main import app


@pytest.fixture
async def client():
    """Async client against the app; dependency overrides are dropped afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
