"""
Pytest configuration for vela_identity persistence tests.

Each test gets a fresh in-memory SQLite database (aiosqlite). Tests marked
``integration`` run against the PostgreSQL server named by
``TEST_DATABASE_URL`` instead and are skipped unless enabled.
"""

import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from vela.infrastructure.persistence.sqlalchemy import (
    build_session_maker,
    create_tables,
    drop_tables,
)
from vela_identity.domain.user import Gender, User, UserRole

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


def _database_url(request) -> str:
    if request.node.get_closest_marker("integration") is None:
        return SQLITE_URL
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL is not set")
    return url


@pytest_asyncio.fixture
async def async_engine(request):
    """
    Provide an engine with a clean schema.

    In-memory SQLite needs a single shared connection (StaticPool), otherwise
    every checkout would see an empty database.
    """
    url = _database_url(request)
    if url.startswith("sqlite"):
        engine = create_async_engine(url, poolclass=StaticPool)
    else:
        engine = create_async_engine(url, poolclass=NullPool)

    await drop_tables(engine)
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncSession:
    """Provide a session that is rolled back after the test."""
    session_maker = build_session_maker(async_engine)
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user():
    """Factory for unsaved users with a unique email per call."""
    counter = iter(range(1_000_000))

    def _make(email: str | None = None, role: UserRole = UserRole.USER) -> User:
        return User.create(
            email=email or f"user{next(counter)}@example.com",
            password_hash="hashed_password",
            first_name="Test",
            last_name="User",
            gender=Gender.OTHER,
            role=role,
        )

    return _make
