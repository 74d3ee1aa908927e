"""Database Session Manager — one async engine shared by the ORM lookups and the kv tables.

Invariants:
    - A session that raises is rolled back before the error leaves the context
    - Every SQLAlchemy failure leaves as StorageError; the original is chained
    - Callers commit explicitly; nothing is committed on their behalf
    - dispose() is the only way the pool is closed (lifespan shutdown)

Design Decisions:
    - Built by the service container from settings, never a module global, so tests
      hand in an engine bound to SQLite
    - expire_on_commit=False: records are read after commit outside any lazy-load
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import StorageError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Integrity constraint violated"),
    (OperationalError, "execute", "Database unreachable or locked"),
    (DBAPIError, "query", "Database driver rejected the statement"),
    (SQLAlchemyError, "session", "Database operation failed"),
)


def _as_storage_error(exc: SQLAlchemyError) -> StorageError:
    for kind, operation, message in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return StorageError(message, operation)
    return StorageError(str(exc), "session")


class DatabaseSessionManager:

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._sessions = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ) -> "DatabaseSessionManager":
        pool_options = {}
        if not database_url.startswith("sqlite"):
            pool_options = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        return cls(create_async_engine(database_url, **pool_options))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._sessions() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                await session.rollback()
                error = _as_storage_error(exc)
                logger.error(
                    f"{error.message}: {exc}", extra={"error_code": error.code},
                )
                raise error from exc

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except StorageError:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
