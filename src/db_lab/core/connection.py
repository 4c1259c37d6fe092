"""Database connection management with SQLAlchemy."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from db_lab.models.config import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Owns the SQLAlchemy async engine and hands out one connection per call.

    The engine is built in the constructor and does the pooling.
    """

    def __init__(self, config: DatabaseConfig):
        """
        Initialize database connection.

        Args:
            config: Database configuration with connection URL and pool settings
        """
        self.config = config

        engine_options = {}
        if config.autocommit:
            engine_options["isolation_level"] = "AUTOCOMMIT"

        self.engine: Optional[AsyncEngine] = create_async_engine(
            config.url,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_pre_ping=True,  # Verify connections before using
            echo=config.echo_sql,
            **engine_options,
        )

    async def dispose(self) -> None:
        """Dispose of the connection pool and cleanup resources."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.debug(f"Disposed engine for {self.config.sanitized_url}")

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[AsyncConnection, None]:
        """
        Get a connection from the pool as an async context manager.

        The connection goes back to the pool on every exit path, including
        errors and task cancellation.

        Yields:
            AsyncConnection for executing queries

        Raises:
            RuntimeError: If the engine has been disposed
        """
        if self.engine is None:
            raise RuntimeError("DatabaseConnection has been disposed.")

        async with self.engine.connect() as conn:
            yield conn

    async def __aenter__(self) -> "DatabaseConnection":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.dispose()
