"""
SchoolHub Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every database test gets its own in-memory SQLite database (aiosqlite,
       StaticPool, foreign keys on) with the full schema created from the
       ORM metadata. The HTTP client routes requests straight into the
       FastAPI app with get_db_session overridden to use that database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        fresh in-memory engine + schema
    │   ├── session_factory
    │   │   ├── db_session:   one AsyncSession for service-level tests
    │   │   └── test_client:  httpx AsyncClient, one session per request
    │   └── seed:             users U1/U2 and messages M1/M2 committed
    └── mock_db_session:  AsyncMock session for failure-path unit tests
"""

import os

# Set before any schoolhub import so the settings singleton picks them up
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "http://testserver"

from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from schoolhub.database import Base, build_engine, build_session_factory, get_db_session
from schoolhub.models import Message, User


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(session_factory):
    """
    Two users and two messages, committed.

    Returns a namespace with ids:
        seed.u1, seed.u2   user ids
        seed.m1, seed.m2   message ids (m1: U2 → U1, m2: U1 → U2)
    """
    async with session_factory() as session:
        alice = User(email="alice@school.test", first_name="Alice", last_name="Abebe", role="teacher")
        bekele = User(email="bekele@school.test", first_name="Bekele", last_name="Tadesse", role="head")
        session.add_all([alice, bekele])
        await session.flush()

        m1 = Message(sender_id=bekele.id, receiver_id=alice.id, content="Staff meeting moved to Friday")
        m2 = Message(sender_id=alice.id, receiver_id=bekele.id, content="Grade 7 attendance sheet attached")
        session.add_all([m1, m2])
        await session.commit()

        return SimpleNamespace(u1=alice.id, u2=bekele.id, m1=m1.id, m2=m2.id)


@pytest_asyncio.fixture
async def add_message(session_factory):
    """Factory fixture: insert one more message and return its id."""

    async def _add(sender_id, receiver_id, content: str):
        async with session_factory() as session:
            message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
            session.add(message)
            await session.commit()
            return message.id

    return _add


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    get_db_session is overridden with the same commit/rollback contract,
    bound to the test database.
    """
    from schoolhub.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_db_session():
    """AsyncSession stand-in for tests that need to force driver failures."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()

    # begin_nested() is used as `async with`; exceptions must propagate
    savepoint = MagicMock()
    savepoint.__aenter__ = AsyncMock(return_value=savepoint)
    savepoint.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = MagicMock(return_value=savepoint)
    return session
