"""
Shared fixtures: an app wired to a throwaway SQLite database.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from database.session import create_tables
from main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef0123456789"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "jwt_secret": TEST_SECRET,
        "password_hash_rounds": 4,
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    await create_tables(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def settings_factory(tmp_path):
    """Build ``Settings`` for the test database with some fields overridden."""

    def _make(**overrides) -> Settings:
        return make_settings(tmp_path, **overrides)

    return _make


@pytest.fixture
def login(client):
    """Register a user and return a Bearer token for it."""

    async def _login(username="ana", email="a@x.com", password="pw123") -> str:
        await client.post(
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        resp = await client.post("/auth/login", json={"email": email, "password": password})
        return resp.json()["token"]

    return _login
