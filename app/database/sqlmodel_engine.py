"""
SQLModel database engine and session management.

This module provides SQLAlchemy/SQLModel database initialization, connection pooling,
and async session management. PostgreSQL (asyncpg) is the production target;
SQLite (aiosqlite) is supported for local development and tests.
"""

from typing import Optional, AsyncGenerator, Dict, Any
from contextlib import asynccontextmanager
import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from app.core.config import Settings

logger = structlog.get_logger(__name__)


class SQLModelDatabaseManager:
    """
    SQLModel database manager with async session support.

    Provides SQLAlchemy engine and session management for the application.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if SQLModel manager is initialized."""
        return self._initialized and self.engine is not None

    def _engine_options(self, database_url: str) -> Dict[str, Any]:
        if database_url.startswith("sqlite"):
            # One connection per session; writers wait on the file lock instead of failing.
            return {
                "poolclass": NullPool,
                "connect_args": {"timeout": 30},
            }

        return {
            "pool_size": self.settings.DATABASE_POOL_SIZE,
            "max_overflow": self.settings.DATABASE_MAX_OVERFLOW,
            "pool_timeout": 30,
            "pool_recycle": 3600,  # Recycle connections every hour
            "pool_pre_ping": True,  # Validate connections
            "connect_args": {
                "server_settings": {
                    "application_name": "saved-searches-api",
                }
            },
        }

    async def initialize(self) -> None:
        """
        Initialize SQLModel engine and session factory.
        """
        if self._initialized:
            logger.warning("SQLModel database manager already initialized")
            return

        try:
            database_url = self.settings.get_database_url()

            self.engine = create_async_engine(
                database_url,
                echo=self.settings.DATABASE_ECHO,
                **self._engine_options(database_url),
            )

            self.async_session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Keep objects usable after commit
                autoflush=True,
            )

            # Test connection
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self._initialized = True
            logger.info(
                "SQLModel database manager initialized successfully",
                database_url=database_url.split("@")[0] + "@***"  # Hide credentials
            )

        except Exception as e:
            logger.error("Failed to initialize SQLModel database manager", error=str(e))
            raise

    async def create_tables(self) -> None:
        """
        Create all SQLModel tables.

        Schema migrations are managed outside this service; this is used for
        development and testing.
        """
        if not self.engine:
            raise RuntimeError("Database manager not initialized")

        try:
            # Import all models to ensure they're registered
            from app.infrastructure.persistence.models.saved_search_table import SavedSearchTable  # noqa: F401

            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

            logger.info("SQLModel tables created successfully")

        except Exception as e:
            logger.error("Failed to create SQLModel tables", error=str(e))
            raise

    async def drop_tables(self) -> None:
        """
        Drop all SQLModel tables.

        WARNING: This will delete all data! Use only for development/testing.
        """
        if not self.engine:
            raise RuntimeError("Database manager not initialized")

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.drop_all)

            logger.warning("SQLModel tables dropped successfully")

        except Exception as e:
            logger.error("Failed to drop SQLModel tables", error=str(e))
            raise

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session with automatic cleanup.

        Commits when the block exits normally and rolls back on error.

        Usage:
            async with db_manager.get_session() as session:
                result = await session.execute(select(SavedSearchTable))
        """
        if not self.async_session_factory:
            raise RuntimeError("Database manager not initialized")

        session = self.async_session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on SQLModel database connection.

        Returns health status information for monitoring.
        """
        if not self.engine:
            return {
                "status": "unhealthy",
                "error": "Database manager not initialized"
            }

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1 as health_check"))

            health: Dict[str, Any] = {
                "status": "healthy",
                "dialect": self.engine.dialect.name,
            }

            pool = self.engine.pool
            if hasattr(pool, "size"):
                health.update(
                    pool_size=pool.size(),
                    checked_in=pool.checkedin(),
                    checked_out=pool.checkedout(),
                    overflow=pool.overflow(),
                )

            return health

        except Exception as e:
            logger.error("SQLModel database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    async def shutdown(self) -> None:
        """
        Shutdown SQLModel database manager and close connections.
        """
        if self.engine:
            try:
                await self.engine.dispose()
                logger.info("SQLModel database manager shut down successfully")
            except Exception as e:
                logger.error("Error during SQLModel database shutdown", error=str(e))
            finally:
                self.engine = None
                self.async_session_factory = None
                self._initialized = False


# Global SQLModel database manager instance
_sqlmodel_db_manager: Optional[SQLModelDatabaseManager] = None


def get_sqlmodel_db_manager(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    """
    Get global SQLModel database manager instance.

    Creates the instance on first call with provided settings.
    Subsequent calls return the existing instance.
    """
    global _sqlmodel_db_manager

    if _sqlmodel_db_manager is None:
        if settings is None:
            from app.core.config import get_settings
            settings = get_settings()
        _sqlmodel_db_manager = SQLModelDatabaseManager(settings)

    return _sqlmodel_db_manager


async def init_sqlmodel_database(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    """
    Initialize global SQLModel database manager.

    Call this during application startup to set up the database connection.
    """
    db_manager = get_sqlmodel_db_manager(settings)
    await db_manager.initialize()
    if db_manager.settings.DATABASE_CREATE_TABLES:
        await db_manager.create_tables()
    return db_manager


async def shutdown_sqlmodel_database() -> None:
    """
    Shutdown global SQLModel database manager.

    Call this during application shutdown to clean up connections.
    """
    global _sqlmodel_db_manager
    if _sqlmodel_db_manager:
        await _sqlmodel_db_manager.shutdown()
        _sqlmodel_db_manager = None
