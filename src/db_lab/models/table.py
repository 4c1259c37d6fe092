"""Table listing and table description models."""

import warnings
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Suppress the specific warning about field 'schema' shadowing
warnings.filterwarnings(
    "ignore",
    message=r'Field name "schema" in "Table\w+" shadows an attribute in parent',
    category=UserWarning,
)


def quote_identifier(name: str) -> str:
    """Bracket-quote a SQL Server identifier."""
    return "[" + name.replace("]", "]]") + "]"


class TableRef(BaseModel):
    """A base table found in a schema listing."""

    model_config = ConfigDict(frozen=True)

    schema: str = Field(..., min_length=1, description="Schema name")
    name: str = Field(..., min_length=1, description="Table name")
    approx_row_count: Optional[int] = Field(
        None,
        description="Row count from partition statistics (None when unknown)",
    )

    @property
    def qualified_name(self) -> str:
        """Bracket-quoted ``[schema].[name]`` reference."""
        return f"{quote_identifier(self.schema)}.{quote_identifier(self.name)}"


class TableDetail(BaseModel):
    """Structure of one table, flattened to display strings.

    A table that does not exist comes back with every facet empty.
    """

    model_config = ConfigDict(frozen=True)

    schema: str = Field(..., description="Schema name")
    name: str = Field(..., description="Table name")
    columns: list[str] = Field(
        default_factory=list,
        description="Column summaries like 'Name NVARCHAR(100) NOT NULL', in ordinal order",
    )
    primary_key: list[str] = Field(
        default_factory=list, description="Primary key columns in key order"
    )
    unique_indexes: list[str] = Field(
        default_factory=list,
        description="Columns covered by UNIQUE constraints, without duplicates",
    )
    foreign_keys: list[str] = Field(
        default_factory=list,
        description="Foreign keys like 'FK_x: col → dbo.Other(id)'",
    )

    @property
    def column_count(self) -> int:
        """Get number of columns."""
        return len(self.columns)
