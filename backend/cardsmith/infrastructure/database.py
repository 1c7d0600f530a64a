"""Database Session Manager — async engine, per-request sessions and store error mapping.

Invariants:
    - Every session rolls back on exception (no partial card/link writes leak)
    - Driver exceptions escaping a session surface as StoreConflict (integrity)
      or StoreUnavailable (everything else), tagged with the session's operation
    - Pool sizing applies to server databases only; SQLite uses the dialect default pool

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: saved cards are read back after commit without lazy loads
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from cardsmith.core.errors import CardsmithError, StoreConflict, StoreUnavailable

logger = logging.getLogger(__name__)


def map_store_error(exc: SQLAlchemyError, operation: str) -> CardsmithError:
    if isinstance(exc, IntegrityError):
        return StoreConflict("Integrity constraint violated", operation)
    if isinstance(exc, OperationalError):
        return StoreUnavailable("Connection or operational error", operation)
    return StoreUnavailable(type(exc).__name__, operation)


class DatabaseSessionManager:
    """Owns the engine and hands out one AsyncSession per unit of work."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "request",
    ) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"Database error ({type(e).__name__}): {e}",
                extra={"operation": operation},
            )
            raise map_store_error(e, operation) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session (readiness check)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except CardsmithError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
