"""Pydantic models for configuration, catalog metadata and query outcomes."""

from .config import DatabaseConfig
from .query import QueryOutcome
from .row import Row, Scalar, to_scalar
from .seed import SeedPack
from .table import TableDetail, TableRef

__all__ = [
    "DatabaseConfig",
    "QueryOutcome",
    "Row",
    "Scalar",
    "to_scalar",
    "SeedPack",
    "TableDetail",
    "TableRef",
]
