"""Pytest fixtures for unit and integration tests."""
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from motivatr.auth.passwords import hash_password
from motivatr.database import get_db
from motivatr.main import app
from motivatr.models.base import Base
from motivatr.models.user import User, empty_week

# Use in-memory SQLite for tests (aiomysql requires MySQL/MariaDB)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    TestSession = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestSession() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client with DB override."""
    app.dependency_overrides[get_db] = lambda: db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user(db) -> User:
    u = User(
        email="a@b.com",
        name="Alex",
        password_hash=hash_password("secret", iterations=1000),
        current_streak=0,
        longest_streak=0,
        last_active_date=None,
        weekly_progress=empty_week(),
    )
    db.add(u)
    await db.flush()
    return u
