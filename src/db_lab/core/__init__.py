"""Core components: connection management, catalog reading, SQL execution."""

from .catalog import CatalogReader
from .connection import DatabaseConnection
from .executor import QueryExecutor

__all__ = [
    "CatalogReader",
    "DatabaseConnection",
    "QueryExecutor",
]
