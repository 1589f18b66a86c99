"""Database configuration and session management."""
import logging
from typing import AsyncGenerator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self):
        self._engine = None
        self._session_factory = None
        self._initialized = False

    def init(self, database_url: str, echo: bool = False, pool_size: int = 5) -> None:
        """
        Initialize the database engine and session factory.

        Args:
            database_url: Async connection URL (postgresql+asyncpg or sqlite+aiosqlite)
            echo: Enable SQL query logging
            pool_size: Connection pool size (0 for NullPool)
        """
        if self._initialized:
            logger.warning("Database already initialized, skipping re-initialization")
            return

        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

        logger.info("Initializing database connection...")

        # SQLite has no server-side pool to manage
        if pool_size == 0 or database_url.startswith("sqlite"):
            self._engine = create_async_engine(
                database_url,
                echo=echo,
                poolclass=NullPool,
            )
        else:
            self._engine = create_async_engine(
                database_url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=10,
                pool_pre_ping=True,
                pool_recycle=300,
            )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

        self._initialized = True
        logger.info("Database connection initialized successfully")

    async def create_all(self) -> None:
        """Create all tables known to the ORM metadata."""
        if not self._initialized or not self._engine:
            raise RuntimeError("Database not initialized. Call init() first.")

        import app.models  # noqa: F401  registers every table on Base.metadata

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self) -> None:
        """Close the database engine and dispose of connections."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._initialized = False
            logger.info("Database connection closed")

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a database session for dependency injection.

        The session commits when the request handler returns and rolls back on error.
        """
        if not self._initialized or not self._session_factory:
            raise RuntimeError("Database not initialized. Call init() first.")

        async with self._session_factory() as session:
            try:
                # Clear any aborted transaction left on a pooled connection
                await session.rollback()
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def session(self) -> AsyncSession:
        """Open a standalone session outside of request handling (startup tasks)."""
        if not self._initialized or not self._session_factory:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._session_factory()

    async def check_connection(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            bool: True if connection is healthy, False otherwise
        """
        if not self._initialized or not self._engine:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    @property
    def dialect_name(self) -> str | None:
        return self._engine.dialect.name if self._engine else None

    @property
    def is_initialized(self) -> bool:
        """Check if database is initialized."""
        return self._initialized


# Global database manager instance
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session
    """
    async for session in db_manager.get_session():
        yield session
