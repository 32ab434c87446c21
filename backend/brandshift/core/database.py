"""Async SQLAlchemy engine, sessions and transactions.

Sessions handed to request handlers commit when the handler returns and
roll back on any SQLAlchemyError. Rollbacks, slow transactions and
connection failures go to ``db_logger``.
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from brandshift.core.config import get_settings
from brandshift.core.logging import db_logger, get_logger

logger = get_logger(__name__)

ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


class Base(DeclarativeBase):
    pass


def to_async_url(db_url: str) -> str:
    """Rewrite a postgres:// or postgresql:// URL for the asyncpg driver."""
    for scheme, async_scheme in ASYNC_SCHEMES.items():
        if db_url.startswith(scheme):
            return async_scheme + db_url[len(scheme) :]
    return db_url


class DatabaseManager:
    """Owns the engine and session factory for the catalog database."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init_db() first.")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call init_db() first.")
        return self._session_factory

    def init_db(self) -> None:
        """Create the engine from settings. Production connections require SSL."""
        settings = get_settings()
        db_url = to_async_url(str(settings.database_url))

        connect_args: dict[str, object] = {
            "timeout": settings.db_connect_timeout,
            "command_timeout": settings.db_command_timeout,
        }
        if settings.environment == "production":
            connect_args["ssl"] = "require"

        try:
            self._engine = create_async_engine(
                db_url,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,
                echo=settings.debug,
                connect_args=connect_args,
            )
        except Exception as e:
            db_logger.connection_error(e, db_url)
            raise

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database engine initialized")

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connections closed")

    async def check_connection(self) -> bool:
        """Run ``SELECT 1``; used by /health/db."""
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            db_logger.connection_error(e, str(get_settings().database_url))
            return False
        return True


db_manager = DatabaseManager()


@asynccontextmanager
async def _committing(
    session: AsyncSession, label: str, table: str | None = None
) -> AsyncGenerator[AsyncSession, None]:
    """Commit on success, roll back and log on SQLAlchemyError, flag slow runs."""
    threshold_ms = get_settings().db_slow_query_threshold_ms
    start_time = time.monotonic()
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        db_logger.transaction_failure(e, table=table, context=f"{label} rolled back")
        raise
    finally:
        duration_ms = (time.monotonic() - start_time) * 1000
        if duration_ms > threshold_ms:
            db_logger.slow_query(query=label, duration_ms=duration_ms, table=table)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one committing session per request."""
    async with db_manager.session_factory() as session:
        async with _committing(session, "request session"):
            yield session


@asynccontextmanager
async def transaction(
    session: AsyncSession, table: str | None = None
) -> AsyncGenerator[AsyncSession, None]:
    """Explicit transaction on an existing session, e.g. for seeding brands."""
    async with _committing(session, f"transaction on {table or 'unknown'}", table):
        yield session
