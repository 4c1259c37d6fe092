"""Base adapter abstract class for database explorers."""

from abc import ABC, abstractmethod
from typing import Optional

from db_lab.models.query import QueryOutcome
from db_lab.models.seed import SeedPack
from db_lab.models.table import TableDetail, TableRef


class BaseAdapter(ABC):
    """Operations a database explorer front end can call."""

    @abstractmethod
    async def list_tables(self, schema: Optional[str] = None) -> list[TableRef]:
        """
        List base tables in a schema.

        Args:
            schema: Schema name (blank for the default schema)

        Returns:
            Tables ordered by name
        """
        ...

    @abstractmethod
    async def describe_table(self, schema: str, table: str) -> TableDetail:
        """
        Describe a table's columns, keys and foreign keys.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            Table detail
        """
        ...

    @abstractmethod
    async def run_query(self, sql: str) -> QueryOutcome:
        """
        Run arbitrary SQL. Never raises for a failing statement.

        Args:
            sql: SQL text

        Returns:
            Query outcome
        """
        ...

    @abstractmethod
    async def seed(self, pack: SeedPack) -> None:
        """Create and populate a database from a seed pack."""
        ...

    @abstractmethod
    async def reset(self, pack: SeedPack) -> None:
        """Return a seeded database to its initial state."""
        ...

    async def dispose(self) -> None:
        """Release pooled resources held by the adapter."""

    async def __aenter__(self) -> "BaseAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()
