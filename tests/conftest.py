"""Pytest fixtures for netadmin API tests.

The database session is an ``AsyncMock``; services are patched per test, so
no PostgreSQL instance is needed.
"""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from netadmin.app import app, limiter
from netadmin.database.session import get_db
from netadmin.modules.governance.auth import AuthenticatedUser, get_current_user


@pytest.fixture
def mock_session() -> AsyncMock:
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def login() -> Callable[..., AuthenticatedUser]:
    """Override the authenticated caller for the rest of the test."""

    def _login(role: str = "super_admin", user_id: str = "user-1", **scope) -> AuthenticatedUser:
        user = AuthenticatedUser(id=user_id, name="Test User", role=role, **scope)
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest_asyncio.fixture
async def async_client(mock_session: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient wired to the FastAPI app with a mocked DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield mock_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
