"""Database Session Manager — async engine for the problems/attempts store.

Invariants:
    - Every session rolls back on a database exception and re-raises it as DatabaseError
    - SQLite connections run with PRAGMA foreign_keys=ON so attempts cascade with
      their problem even when rows are deleted outside the ORM
    - Pool sizing applies to server databases only; SQLite keeps the driver's pool
      (StaticPool for :memory:, which the test suite relies on)

Design Decisions:
    - Module-level db_manager set by init_db() from the FastAPI lifespan, never at import
    - expire_on_commit=False: route handlers serialize ORM objects after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from codedeck.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if _is_sqlite(database_url):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _translate(exc: SQLAlchemyError) -> DatabaseError:
    # Most specific first: IntegrityError and OperationalError are DBAPIErrors
    if isinstance(exc, IntegrityError):
        return DatabaseError("Integrity constraint violated", "commit")
    if isinstance(exc, OperationalError):
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        if _is_sqlite(database_url):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _translate(e)
            logger.error(f"{error.message}: {e}", extra={"error_code": error.code})
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 against the engine (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
