"""
Database Connection Management

Async SQLAlchemy engine for the key-value table with:
- Session factory and transaction management
- Health checks
- Graceful shutdown

SECURITY: Connection strings may contain credentials and must
never be logged.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from zenstudent.config.logging_config import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all ORM models."""
    pass


class DatabaseManager:
    """
    Manages the engine and sessions.

    Usage:
        db = DatabaseManager(settings.storage.url)
        await db.initialize()
        async with db.session() as session:
            # use session
        await db.close()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Initialize database manager (connection not established)."""
        self._url = url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._initialized = False

    async def initialize(self, create_schema: bool = True) -> None:
        """
        Create the engine and session factory.

        Args:
            create_schema: Create missing tables (SQLite deployments
                without an Alembic step)
        """
        if self._initialized:
            logger.warning("Database already initialized")
            return

        self._engine = create_async_engine(
            self._url,
            pool_pre_ping=True,
            echo=self._echo,
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if create_schema:
            # Registers kv_store on Base.metadata
            from zenstudent.infrastructure.database.models import KeyValueEntryModel  # noqa: F401

            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        self._initialized = True
        logger.info("Database engine initialized", dialect=self._engine.dialect.name)

    async def close(self) -> None:
        """Dispose of the engine; called during shutdown."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._initialized = False
            logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session with automatic commit/rollback.

        Yields:
            AsyncSession: Database session
        """
        if not self._session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is reachable, False otherwise
        """
        if not self._engine:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._initialized
