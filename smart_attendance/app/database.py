# smart_attendance/app/database.py
"""
Async database access for the data entry service.

The validation engine only reads the reference collections, so this module
owns one engine, a session factory pinned to the attendance schema, the
``get_db`` dependency and a health check.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .models.base import SCHEMA_NAME

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Holds the async engine and hands out sessions on the attendance schema."""

    def __init__(self) -> None:
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self.schema: str = SCHEMA_NAME

    @property
    def is_initialized(self) -> bool:
        return self.session_factory is not None

    async def initialize(
        self, database_url: str, schema: str = SCHEMA_NAME, **engine_options: Any
    ) -> None:
        """Create the engine and check that the schema is reachable.

        ``engine_options`` are passed to ``create_async_engine`` (pool sizes,
        echo).
        """
        if self.is_initialized:
            logger.warning("Database already initialized")
            return
        if not database_url:
            raise ValueError("DATABASE_URL is required")

        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

        engine = create_async_engine(
            database_url,
            pool_pre_ping=True,
            connect_args={"server_settings": {"search_path": f"{schema},public"}},
            **engine_options,
        )
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Could not reach database schema '{schema}': {e}")
            await engine.dispose()
            raise

        self.engine = engine
        self.schema = schema
        self.session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
        logger.info(f"Database ready, reference data read from schema '{schema}'")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call init_db() first.")
        async with self.session_factory() as session:
            yield session

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.session_factory = None


db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session for one request."""
    async with db_manager.get_session() as session:
        yield session


async def init_db(
    database_url: str, schema: str = SCHEMA_NAME, **engine_options: Any
) -> None:
    await db_manager.initialize(database_url, schema=schema, **engine_options)


async def check_db_health() -> Dict[str, Any]:
    if db_manager.engine is None:
        return {"status": "unhealthy", "message": "Database not initialized"}
    try:
        async with db_manager.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "message": str(e)}
    return {"status": "healthy", "schema": db_manager.schema}
