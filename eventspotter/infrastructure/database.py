"""
Async SQLAlchemy engine and session management.

One Database handle is created per application by the FastAPI
lifespan and stored on ``app.state.database``. Repositories receive
the handle and open short-lived sessions from it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from eventspotter.infrastructure.errors import translate_integrity_error
from eventspotter.infrastructure.models import Base

logger = logging.getLogger(__name__)

SNAPSHOT_ISOLATION = "REPEATABLE READ"


class Database:
    """Owns the async engine and hands out sessions.

    Attributes:
        url: SQLAlchemy async database URL.
    """

    def __init__(self, url: str, *, pool_size: int = 5, echo: bool = False) -> None:
        self.url = url
        self._pool_size = pool_size
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(
            self.url,
            echo=self._echo,
            pool_size=self._pool_size,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info(
            "Database engine created: host=%s, pool_size=%d",
            self.url.split("@")[-1],
            self._pool_size,
        )

    async def create_all(self) -> None:
        """Create any missing tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created / verified")

    async def disconnect(self) -> None:
        """Dispose of the engine and release pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def _new_session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._session_factory()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error.

        Integrity errors are re-raised as domain persistence errors.
        """
        session = self._new_session()
        try:
            yield session
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            translated = translate_integrity_error(exc)
            if translated is exc:
                raise
            raise translated from exc
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[AsyncSession]:
        """Yield a read-only session whose statements share one snapshot."""
        session = self._new_session()
        try:
            if self.engine.dialect.name == "postgresql":
                await session.connection(execution_options={"isolation_level": SNAPSHOT_ISOLATION})
            yield session
        finally:
            await session.rollback()
            await session.close()
