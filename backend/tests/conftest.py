"""
Pytest configuration and fixtures.

This file is automatically discovered by pytest and provides
shared fixtures for all test modules.

Every test gets its own in-memory SQLite database (aiosqlite driver) with
foreign keys switched on, so ON DELETE CASCADE and unique constraints
behave as they do on PostgreSQL.

References:
-----------
- Pytest Fixtures: https://docs.pytest.org/en/stable/fixture.html
- FastAPI Testing: https://fastapi.tiangolo.com/advanced/async-tests/
"""

import os

# Settings are read at import time; configure them before importing tubebrief
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-0123456789")
os.environ["APP_ENV"] = "testing"
os.environ["YOUTUBE_API_KEY"] = ""
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import timedelta
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tubebrief.core.security import create_access_token
from tubebrief.db.base import Base
from tubebrief.db.deps import get_db
from tubebrief.main import app
from tubebrief.models.user import User


# ================================
# Database Fixtures
# ================================

@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh in-memory database with all tables.

    StaticPool keeps the single in-memory connection alive for the whole
    test, so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A database session for calling services directly."""
    async with session_factory() as session:
        yield session


# ================================
# FastAPI Client Fixtures
# ================================

@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing FastAPI endpoints.

    Overrides the get_db dependency so each request gets its own session
    on the test database.

    Usage:
        async def test_something(client: AsyncClient):
            response = await client.get("/api/v1/channels", headers=auth_headers)
            assert response.status_code == 200
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ================================
# User Fixtures
# ================================

@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A user row as get_current_user() would have created it."""
    user = User(
        id="google-oauth2|alice",
        email="alice@example.com",
        name="Alice Johnson",
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user, for ownership checks."""
    user = User(
        id="google-oauth2|bob",
        email="bob@example.com",
        name="Bob Smith",
    )
    db_session.add(user)
    await db_session.commit()
    return user


# ================================
# Authentication Fixtures
# ================================

@pytest.fixture
def make_auth_headers() -> Callable[..., dict[str, str]]:
    """
    Build Authorization headers carrying identity provider style claims.

    Usage:
        headers = make_auth_headers("google-oauth2|carol", "carol@example.com")
    """
    def _make(
        sub: str = "google-oauth2|alice",
        email: str = "alice@example.com",
        name: str = "Alice Johnson",
        expires_delta: timedelta = timedelta(minutes=30),
    ) -> dict[str, str]:
        token = create_access_token(
            data={"sub": sub, "email": email, "name": name},
            expires_delta=expires_delta,
        )
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def auth_headers(make_auth_headers) -> dict[str, str]:
    """Headers for Alice (same id as the test_user fixture)."""
    return make_auth_headers()


@pytest.fixture
def other_auth_headers(make_auth_headers) -> dict[str, str]:
    """Headers for Bob (same id as the other_user fixture)."""
    return make_auth_headers("google-oauth2|bob", "bob@example.com", "Bob Smith")


# ================================
# Pytest Hooks
# ================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (exercises the HTTP API)"
    )
