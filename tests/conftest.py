"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── test_settings:   Settings pointing at a fresh SQLite file in tmp_path
    ├── test_app:        App built from test_settings with its lifespan entered
    └── test_client:     HTTPX AsyncClient talking to test_app in-process
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep test output quiet; set before the app package reads its settings
os.environ.setdefault("LOG_LEVEL", "WARNING")

from blog_api.config import Settings  # noqa: E402
from blog_api.main import create_app  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_update_missing(mock_db_session):
            mock_db_session.get.return_value = None
            await post_service.update_post(mock_db_session, str(uuid4()), payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    """Settings for a scratch SQLite database and a scratch static directory."""
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html><body>Blog Posts</body></html>")
    (static_dir / "app.js").write_text("fetchPosts();\n")

    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}",
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    Application with its lifespan running (database connected, table created).

    ASGITransport does not send lifespan events, so the lifespan context is
    entered here directly.
    """
    app = create_app(test_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
