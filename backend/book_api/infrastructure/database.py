"""Database Session Manager: async connection pool, rollback on failure, health checks.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - Store exceptions reach routes only as BookApiError subclasses:
      IntegrityError -> ConflictError, any other SQLAlchemyError -> UnexpectedFailure

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: ORM rows stay readable after commit in async context
    - translate_store_errors wraps each service operation, so the 500 message
      names the operation ("Failed to create author") while errors carries
      the driver's text
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from book_api.core.errors import ConflictError, UnexpectedFailure

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
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
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
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
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session


@asynccontextmanager
async def translate_store_errors(
    db: AsyncSession, action: str, conflict_message: str | None = None,
) -> AsyncGenerator[None, None]:
    """Map store exceptions raised inside the block onto the error taxonomy.

    Args:
        db: Session to roll back when the block fails.
        action: Message for unexpected failures, e.g. "Failed to create author".
        conflict_message: Message for uniqueness violations. When None an
            IntegrityError is treated as unexpected.
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        if conflict_message is None:
            logger.error(f"{action}: {e.orig}")
            raise UnexpectedFailure(action, str(e.orig)) from e
        logger.warning(f"{action}: integrity violation: {e.orig}")
        raise ConflictError(conflict_message, str(e.orig)) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"{action}: {e}", exc_info=True)
        raise UnexpectedFailure(action, str(e)) from e
