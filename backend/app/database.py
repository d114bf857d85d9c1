"""
Noteful Backend: Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Handlers never reach for a global connection. Each request receives its own
AsyncSession through Depends(get_db_session), so tests can swap the backend
with app.dependency_overrides[get_db_session].
"""

import logging
from typing import AsyncGenerator, Callable

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.exceptions import StorageError

logger = logging.getLogger(__name__)

# Largest value an Integer primary key can hold (int4 on PostgreSQL)
MAX_ROW_ID = 2_147_483_647


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES ... ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Server databases get the configured pool sizing. SQLite gets its
    dialect default pool plus foreign key enforcement, which is what the
    test suite runs against.
    """
    if url.startswith("sqlite"):
        async_engine = create_async_engine(url, echo=echo)
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return async_engine

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url, echo=settings.log_level == "DEBUG")

# expire_on_commit=False: rows stay readable after the dependency commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations
    and the test suite uses for create_all().
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
def make_session_dependency(
    factory: async_sessionmaker,
) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """
    Build a FastAPI dependency yielding one session per request from `factory`.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits whatever the handler left uncommitted
           (write routes have already called commit_session)
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)
    """

    async def session_dependency() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    return session_dependency


get_db_session = make_session_dependency(async_session_factory)


async def commit_session(db: AsyncSession) -> None:
    """
    Commit the request's writes before the handler builds its response.

    The dependency's own commit runs after the response has been sent, so
    write routes commit here; a failed commit answers 500, never 201/204.
    """
    try:
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Commit failed: %s", str(e), exc_info=True)
        raise StorageError(
            message="Could not save changes. Please try again.",
            context={"error_type": type(e).__name__},
        ) from e


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections; called from the app lifespan on shutdown."""
    await engine.dispose()
