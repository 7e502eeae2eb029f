"""
Shared fixtures.

The client is exercised against the in-memory development backend through
httpx.ASGITransport, so no socket is ever opened.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.backend.main import create_app
from storefront.client.storefront import StorefrontClient
from storefront.client.token_store import TokenStore
from storefront.core.config import Settings

SHOPPER_EMAIL = "shopper@seekon.com"
SHOPPER_PASSWORD = "secret123"


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the developer's environment."""
    return Settings(
        API_URL="http://testserver",
        TOKEN_FILE=tmp_path / "session.json",
        ADMIN_EMAIL="admin@seekon.com",
        ADMIN_PASSWORD="admin1234",
    )


@pytest.fixture
def app(test_settings):
    """A fresh backend with its own in-memory data."""
    return create_app(test_settings)


@pytest.fixture
def test_client(app):
    """FastAPI TestClient for direct endpoint tests."""
    return TestClient(app)


@pytest.fixture
def token_store():
    return TokenStore()


@pytest.fixture
async def shop(app, test_settings, token_store):
    """StorefrontClient talking to the in-memory backend."""
    client = StorefrontClient(
        settings=test_settings,
        token_store=token_store,
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.aclose()


@pytest.fixture
async def logged_in_shop(shop):
    """StorefrontClient with a registered and signed-in shopper."""
    await shop.auth.register("Shopper", SHOPPER_EMAIL, SHOPPER_PASSWORD)
    return shop


@pytest.fixture
def auth_headers(test_client):
    """Bearer header for a freshly registered shopper."""
    response = test_client.post(
        "/api/auth/register",
        json={"name": "Shopper", "email": SHOPPER_EMAIL, "password": SHOPPER_PASSWORD},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(test_client):
    response = test_client.post(
        "/api/auth/login", json={"email": "admin@seekon.com", "password": "admin1234"}
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}
