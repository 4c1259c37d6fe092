"""Database adapters."""

from .base import BaseAdapter
from .sqlserver import SqlServerAdapter
from ..models.config import DatabaseConfig

__all__ = [
    "BaseAdapter",
    "SqlServerAdapter",
    "create_adapter",
]


def create_adapter(config: DatabaseConfig) -> BaseAdapter:
    """
    Factory function to create the adapter for a configuration.

    Args:
        config: Database configuration

    Returns:
        Database adapter instance

    Raises:
        ValueError: If database type is not supported
    """
    dialect = config.dialect

    adapters = {
        "mssql": SqlServerAdapter,
    }

    adapter_class = adapters.get(dialect)

    if adapter_class is None:
        raise ValueError(
            f"Unsupported database dialect: {dialect}. "
            f"Supported dialects: {', '.join(adapters.keys())}"
        )

    return adapter_class(config)
