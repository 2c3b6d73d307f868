import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.db import build_engine_args
from app.models import Base
from settings import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Creates and drops the schema outside of Alembic (local setup and tests)."""

    _engine: AsyncEngine | None

    def __init__(self) -> None:
        self._engine = None

    def init_db(self, database_url: str | None = None) -> None:
        """Initialize the database engine."""
        if self._engine is not None:
            return

        db_url = database_url or settings.database.url
        self._engine = create_async_engine(db_url, **build_engine_args(db_url))

        logger.info("Database engine initialized")

    async def create_tables(self) -> None:
        """Create all tables."""
        if not self._engine:
            raise RuntimeError("Database not initialized. Call init_db() first.")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all tables."""
        if not self._engine:
            raise RuntimeError("Database not initialized. Call init_db() first.")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        logger.info("Database tables dropped")

    async def close(self) -> None:
        """Close the database engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database engine closed")


# Global database manager instance
db_manager = DatabaseManager()
