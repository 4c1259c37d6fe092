"""db-lab: explore a SQL Server database (tables, schemas, ad-hoc SQL)."""

from db_lab.adapters import BaseAdapter, SqlServerAdapter, create_adapter
from db_lab.errors import DbLabError, InvalidInputError, UnsupportedOperationError
from db_lab.models import (
    DatabaseConfig,
    QueryOutcome,
    Row,
    SeedPack,
    TableDetail,
    TableRef,
)

__version__ = "0.1.0"

__all__ = [
    "BaseAdapter",
    "SqlServerAdapter",
    "create_adapter",
    "DatabaseConfig",
    "TableRef",
    "TableDetail",
    "QueryOutcome",
    "Row",
    "SeedPack",
    "DbLabError",
    "InvalidInputError",
    "UnsupportedOperationError",
]
