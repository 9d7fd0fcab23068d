"""
SchoolHub Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine (pooled for PostgreSQL, single shared
       connection for in-memory SQLite), provides a session dependency that
       commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system,
       and by the test suite to build throwaway in-memory databases.
When:  Engine is created at module import; sessions are created per-request.

Referential integrity:
    saved_messages rows are removed by the database when their user or
    message is deleted (ON DELETE CASCADE). SQLite only honours foreign keys
    when `PRAGMA foreign_keys=ON` is issued per connection, so every SQLite
    engine built here registers a connect hook that turns it on.

Savepoints on SQLite:
    The pysqlite driver (which aiosqlite wraps) issues its own BEGIN lazily
    and breaks SAVEPOINT. SQLite engines switch the driver to autocommit and
    let SQLAlchemy emit BEGIN itself, so `begin_nested()` works as it does
    on PostgreSQL.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from schoolhub.config import settings


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # Driver-level transactions off; SQLAlchemy emits BEGIN in _begin_sqlite
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite(conn) -> None:
    conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine configured for the given URL.

    PostgreSQL:       pool_size / max_overflow / pre-ping from settings,
                      connections recycled hourly.
    SQLite (file):    default pool, foreign keys enabled.
    SQLite (memory):  StaticPool so every session sees the same database.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}

    if database_url.startswith("sqlite"):
        if ":memory:" in database_url or database_url.rstrip("/").endswith(":"):
            options["poolclass"] = StaticPool
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    new_engine = create_async_engine(database_url, **options)

    if database_url.startswith("sqlite"):
        event.listen(new_engine.sync_engine, "connect", _configure_sqlite_connection)
        event.listen(new_engine.sync_engine, "begin", _begin_sqlite)

    return new_engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: records stay readable after the request commits
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic reads for
    migrations and the test suite uses for `create_all`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Creates a new session from the factory
    2. Yields it to the route handler
    3. On success: commits the transaction
    4. On error: rolls back and re-raises for the global error handlers
    5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/users/{user_id}/saved-messages")
        async def list_saved(user_id: UUID, db: AsyncSession = Depends(get_db_session)):
            return await saved_message_service.find_by_user(db, user_id)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the application lifespan on shutdown."""
    await engine.dispose()
