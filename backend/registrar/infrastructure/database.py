"""Database Session Manager — async engine, short-lived sessions, error translation.

Invariants:
    - A session lives for one store call; callers never share one across tasks
    - Any SQLAlchemy failure inside a session rolls back before it propagates
    - IntegrityError → ConstraintViolationError (driver message kept for the client)
    - Every other SQLAlchemyError → DatabaseError naming the failed operation

Design Decisions:
    - Module-level db_manager set by init_db() from the lifespan; routes reach
      it through get_db_manager() so tests can override the dependency
    - Pool sizing comes from Settings via init_db(), never read here
    - expire_on_commit=False: records are copied out after commit without a reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from registrar.core.errors import (
    ConstraintViolationError, DatabaseError, RegistrarError,
)

logger = logging.getLogger(__name__)


def translate_error(exc: SQLAlchemyError) -> RegistrarError:
    """Map a SQLAlchemy exception onto the Registrar error hierarchy."""
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError(str(exc.orig))
    if isinstance(exc, OperationalError):
        return DatabaseError("connection or operational error", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("driver error", "query")
    return DatabaseError(type(exc).__name__, "session")


class DatabaseSessionManager:
    """Owns the engine; hands out one AsyncSession per unit of work."""

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
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                error = translate_error(e)
                level = logging.WARNING if error.http_status < 500 else logging.ERROR
                logger.log(
                    level, f"{type(e).__name__} rolled back: {e}",
                    extra={"error_code": error.code},
                )
                raise error from e

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Database not reachable: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **pool_options) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **pool_options)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency; fails loudly if the lifespan has not run."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager
