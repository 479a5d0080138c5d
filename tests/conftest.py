"""Shared fixtures: in-memory SQLite database and API client."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import nestquarter.models  # noqa: F401
from nestquarter.database import Base, get_db
from nestquarter.main import app
from nestquarter.models import Property, User
from nestquarter.services.booking_service import BookingService
from tests.factories import make_property, make_user


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def booking_service() -> BookingService:
    return BookingService(min_stay_weeks=2)


@pytest.fixture
async def client(session_maker) -> AsyncIterator[AsyncClient]:
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def host(db) -> User:
    return await make_user(db, "host@example.com", last_name="Hosting")


@pytest.fixture
async def guest(db) -> User:
    return await make_user(db, "guest@example.com", last_name="Staying")


@pytest.fixture
async def other_guest(db) -> User:
    return await make_user(db, "other@example.com")


@pytest.fixture
async def listing(db, host) -> Property:
    return await make_property(db, host)
