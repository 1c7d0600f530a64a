"""Service test fixtures — async DB, card store + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - seed_owner inserts the profile that owns the cards under test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features such as ON DELETE CASCADE are covered by the
      ORM cascade instead)
"""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from cardsmith.db.base import Base
from cardsmith.infrastructure.database import get_db, DatabaseSessionManager
from cardsmith.infrastructure.sql_card_store import SqlCardStore
from cardsmith.models.profile import Profile
from cardsmith.services.card_service import CardService
import cardsmith.infrastructure.database as db_module
from cardsmith.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlCardStore(test_db)


@pytest.fixture
def service(store):
    return CardService(store, require_slug=True)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_owner(test_session_factory):
    """Insert the profile that owns the cards under test."""
    async with test_session_factory() as session:
        profile = Profile(id=uuid4(), email="jane@example.com", name="Jane Doe")
        session.add(profile)
        await session.commit()
        await session.refresh(profile)
    return profile


@pytest.fixture
def owner_headers(seed_owner):
    return {"X-Owner-Id": str(seed_owner.id)}
