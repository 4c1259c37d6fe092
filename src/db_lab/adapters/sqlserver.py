"""SQL Server adapter."""

import logging
from typing import Optional

from db_lab.adapters.base import BaseAdapter
from db_lab.core.catalog import CatalogReader
from db_lab.core.connection import DatabaseConnection
from db_lab.core.executor import QueryExecutor
from db_lab.errors import UnsupportedOperationError
from db_lab.models.config import DatabaseConfig
from db_lab.models.query import QueryOutcome
from db_lab.models.seed import SeedPack
from db_lab.models.table import TableDetail, TableRef

logger = logging.getLogger(__name__)


class SqlServerAdapter(BaseAdapter):
    """Explore a SQL Server database.

    Every call checks out its own connection and returns it when done, so one
    adapter can serve concurrent callers.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        connection: Optional[DatabaseConnection] = None,
    ):
        """
        Initialize the adapter.

        Args:
            config: Database configuration
            connection: Existing connection manager to use instead of
                building one from ``config``
        """
        self.config = config
        self.connection = connection or DatabaseConnection(config)
        self.catalog = CatalogReader(self.connection, config.default_schema)
        self.executor = QueryExecutor(self.connection)

    async def list_tables(self, schema: Optional[str] = None) -> list[TableRef]:
        return await self.catalog.list_tables(schema)

    async def describe_table(self, schema: str, table: str) -> TableDetail:
        return await self.catalog.describe_table(schema, table)

    async def run_query(self, sql: str) -> QueryOutcome:
        return await self.executor.run(sql)

    async def seed(self, pack: SeedPack) -> None:
        raise UnsupportedOperationError("seed", "seed packs cannot be loaded yet")

    async def reset(self, pack: SeedPack) -> None:
        raise UnsupportedOperationError("reset", "seed packs cannot be reset yet")

    async def dispose(self) -> None:
        await self.connection.dispose()
        logger.debug("SQL Server adapter disposed")
