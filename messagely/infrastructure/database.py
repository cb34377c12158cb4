"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy, timeout and connection errors escaping a store become StoreUnavailableError
    - SQLite connections enforce foreign keys (PostgreSQL always does)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Stores translate IntegrityError themselves (they know which constraint
      means what); this manager is the outer net for everything else
    - No retries: a failed or timed-out statement surfaces immediately
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from messagely.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# Driver timeouts (asyncpg command_timeout) and refused connections can
# surface unwrapped by SQLAlchemy
_STORE_FAILURES = (SQLAlchemyError, TimeoutError, OSError)


def to_store_error(exc: Exception, operation: str) -> StoreUnavailableError:
    """Map a store failure with no domain meaning to StoreUnavailableError."""
    if isinstance(exc, (PoolTimeoutError, TimeoutError)):
        return StoreUnavailableError("Timed out", operation)
    if isinstance(exc, IntegrityError):
        return StoreUnavailableError("Integrity constraint violated", operation)
    if isinstance(exc, OperationalError):
        return StoreUnavailableError("Connection or operational error", operation)
    if isinstance(exc, DBAPIError):
        return StoreUnavailableError("Database driver error", operation)
    if isinstance(exc, OSError):
        return StoreUnavailableError("Database unreachable", operation)
    return StoreUnavailableError("Database operation failed", operation)


@asynccontextmanager
async def guard_store(db: AsyncSession, operation: str) -> AsyncGenerator[None, None]:
    """Roll back and re-raise store failures as StoreUnavailableError.

    Typed errors raised inside the block pass through unchanged; callers catch
    IntegrityError themselves when a constraint has domain meaning.
    """
    try:
        yield
    except _STORE_FAILURES as e:
        await db.rollback()
        logger.error(
            f"Store {operation} failed: {type(e).__name__}",
            extra={"operation": operation},
        )
        raise to_store_error(e, operation) from e


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_for(
    database_url: str,
    pool_size: int = 20,
    max_overflow: int = 10,
    timeout_seconds: float = 10.0,
) -> AsyncEngine:
    """Build an async engine with pool and statement timeouts for the URL's dialect."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=False)
        enable_sqlite_foreign_keys(engine)
        return engine
    connect_args = {}
    if database_url.startswith("postgresql+asyncpg"):
        connect_args = {
            "timeout": timeout_seconds,
            "command_timeout": timeout_seconds,
        }
    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=timeout_seconds,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args=connect_args,
    )


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        timeout_seconds: float = 10.0,
    ):
        self.engine = create_engine_for(
            database_url, pool_size, max_overflow, timeout_seconds,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except _STORE_FAILURES as e:
            await session.rollback()
            logger.error(f"DB error: {type(e).__name__}")
            raise to_store_error(e, "session") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreUnavailableError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
