"""
Postboard: Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite +
       StaticPool, so all sessions share one connection) with the posts table
       created from Base.metadata. The app's get_db_session dependency is
       overridden to use it, and requests go through httpx's ASGITransport.

Fixture Overview:
    engine / session_factory / db_session: real SQLite-backed sessions
    app:          fresh FastAPI app wired to the test database
    test_client:  httpx AsyncClient for endpoint tests
    failing_session: AsyncSession stand-in whose every call raises
    sample_post_data: a valid create body
"""

import os

# Must be set before postboard.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["EXPOSE_ERROR_DETAILS"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from postboard.database import Base, get_db_session
from postboard.main import create_app
from postboard.models.post import Post  # noqa: F401


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    """
    A fresh app whose sessions come from the per-test SQLite database.

    The override mirrors get_db_session: commit on success, roll back on error.
    """
    application = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def failing_session():
    """
    An AsyncSession stand-in where every database call raises OperationalError,
    as a dropped connection would.
    """
    error = OperationalError("SELECT posts", {}, Exception("connection refused"))
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock(side_effect=error)
    session.get = AsyncMock(side_effect=error)
    session.commit = AsyncMock(side_effect=error)
    session.delete = AsyncMock(side_effect=error)
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_post_data():
    return {"title": "제목", "body": "내용", "tags": ["a", "b"]}
