"""
Database connection and session management for the relational backend.
Handles async database operations with SQLAlchemy and connection pooling.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, Integer
from app.config import settings, Settings
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        config: Application settings with a database URL

    Returns:
        AsyncEngine bound to asyncpg or aiosqlite
    """
    if config.is_sqlite:
        # SQLite pools do not accept sizing arguments
        return create_async_engine(config.database_url, echo=config.db_echo)

    return create_async_engine(
        config.database_url,
        echo=config.db_echo,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=config.db_pool_recycle,
        pool_timeout=30,
        connect_args={
            "server_settings": {
                "application_name": "rental_listings_api",
            }
        }
    )


engine: Optional[AsyncEngine] = build_engine(settings) if settings.use_database else None

AsyncSessionLocal: Optional[async_sessionmaker] = (
    async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    if engine is not None else None
)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table is keyed by a serial integer id.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def _require_engine() -> AsyncEngine:
    if engine is None:
        raise RuntimeError("DATABASE_URL is not configured")
    return engine


async def test_database_connection() -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    try:
        _require_engine()
        async with AsyncSessionLocal() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def create_tables(target_engine: Optional[AsyncEngine] = None):
    """
    Create all database tables.
    This will be used during application startup.
    """
    # Register every model on the metadata before create_all
    import app.models  # noqa: F401

    target_engine = target_engine or _require_engine()

    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")


async def drop_tables(target_engine: Optional[AsyncEngine] = None):
    """
    Drop all database tables.
    This should only be used in testing or development.
    """
    if settings.is_production:
        raise RuntimeError("Cannot drop tables in production environment")

    import app.models  # noqa: F401

    target_engine = target_engine or _require_engine()

    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")


async def close_db_connection():
    """
    Close database connection.
    This should be called during application shutdown.
    """
    if engine is not None:
        await engine.dispose()
        logger.info("Database connections closed")
