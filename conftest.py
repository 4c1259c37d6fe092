"""Pytest configuration for db-lab tests.

This module provides global pytest configuration and custom warning filters.
"""

import warnings

# Filter Pydantic warning about 'schema' field shadowing BaseModel attribute
# The models need a 'schema' field for SQL Server schema names
warnings.filterwarnings(
    "ignore",
    message=r".*Field name \"schema\".*shadows an attribute.*",
    category=UserWarning,
)
