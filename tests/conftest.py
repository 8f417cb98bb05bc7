"""Pytest configuration and fixtures for the back-office API.

Uses app.main:app for HTTP tests. Firestore-backed services are replaced
through app.dependency_overrides, so no service account is needed.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_current_user, get_current_user_optional
from app.application.dtos.common import CurrentUser
from app.main import app


@pytest.fixture
def test_user() -> CurrentUser:
    return CurrentUser(
        uid="user-1",
        email="sales@ohplus.test",
        display_name="Sam Sales",
        company_id="company-1",
        roles=["sales"],
    )


@pytest.fixture(autouse=True)
def _clear_overrides():
    """Each test starts without dependency overrides."""
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def signed_in(test_user: CurrentUser) -> CurrentUser:
    """Sign test_user in for every route (required and optional auth)."""
    app.dependency_overrides[get_current_user] = lambda: test_user
    app.dependency_overrides[get_current_user_optional] = lambda: test_user
    return test_user
