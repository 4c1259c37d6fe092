"""Catalog queries against INFORMATION_SCHEMA and the sys.* views."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import text

from db_lab.errors import InvalidInputError
from db_lab.models.table import TableDetail, TableRef

if TYPE_CHECKING:
    from db_lab.core.connection import DatabaseConnection

logger = logging.getLogger(__name__)

# CHARACTER_MAXIMUM_LENGTH reported for varchar(max), nvarchar(max), varbinary(max)
UNBOUNDED_LENGTH = -1

# Row counts sum the heap (index_id 0) or clustered index (index_id 1)
# partitions of user objects.
LIST_TABLES_SQL = text("""
    WITH RowCounts AS (
        SELECT
            OBJECT_SCHEMA_NAME(p.[object_id]) AS [SchemaName],
            OBJECT_NAME(p.[object_id])        AS [TableName],
            SUM(p.[row_count])                AS [ApproxRowCount]
        FROM sys.dm_db_partition_stats AS p
        WHERE p.[index_id] IN (0, 1)
          AND p.[object_id] > 0
        GROUP BY OBJECT_SCHEMA_NAME(p.[object_id]), OBJECT_NAME(p.[object_id])
    )
    SELECT
        t.TABLE_SCHEMA                    AS [Schema],
        t.TABLE_NAME                      AS [Name],
        CAST(rc.ApproxRowCount AS BIGINT) AS [ApproxRowCount]
    FROM INFORMATION_SCHEMA.TABLES AS t
    LEFT JOIN RowCounts AS rc
        ON rc.SchemaName = t.TABLE_SCHEMA
       AND rc.TableName  = t.TABLE_NAME
    WHERE t.TABLE_TYPE = 'BASE TABLE'
      AND t.TABLE_SCHEMA = :schema
    ORDER BY t.TABLE_NAME
""")

COLUMNS_SQL = text("""
    SELECT
        c.COLUMN_NAME,
        c.DATA_TYPE,
        c.IS_NULLABLE,
        c.CHARACTER_MAXIMUM_LENGTH,
        c.NUMERIC_PRECISION,
        c.NUMERIC_SCALE
    FROM INFORMATION_SCHEMA.COLUMNS AS c
    WHERE c.TABLE_SCHEMA = :schema AND c.TABLE_NAME = :table
    ORDER BY c.ORDINAL_POSITION
""")

PRIMARY_KEY_SQL = text("""
    SELECT kcu.COLUMN_NAME
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS AS tc
    JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS kcu
      ON kcu.CONSTRAINT_SCHEMA = tc.CONSTRAINT_SCHEMA
     AND kcu.CONSTRAINT_NAME  = tc.CONSTRAINT_NAME
    WHERE tc.TABLE_SCHEMA = :schema AND tc.TABLE_NAME = :table
      AND tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
    ORDER BY kcu.ORDINAL_POSITION
""")

UNIQUE_SQL = text("""
    SELECT kcu.COLUMN_NAME
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS AS tc
    JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS kcu
      ON kcu.CONSTRAINT_SCHEMA = tc.CONSTRAINT_SCHEMA
     AND kcu.CONSTRAINT_NAME  = tc.CONSTRAINT_NAME
    WHERE tc.TABLE_SCHEMA = :schema AND tc.TABLE_NAME = :table
      AND tc.CONSTRAINT_TYPE = 'UNIQUE'
    ORDER BY kcu.ORDINAL_POSITION
""")

FOREIGN_KEYS_SQL = text("""
    SELECT
        fk.name                                         AS [ConstraintName],
        c1.name                                         AS [ReferencingColumn],
        OBJECT_SCHEMA_NAME(fk.referenced_object_id)     AS [ReferencedSchema],
        OBJECT_NAME(fk.referenced_object_id)            AS [ReferencedTable],
        c2.name                                         AS [ReferencedColumn]
    FROM sys.foreign_keys AS fk
    JOIN sys.foreign_key_columns AS fkc
      ON fkc.constraint_object_id = fk.object_id
    JOIN sys.columns AS c1
      ON c1.object_id = fkc.parent_object_id AND c1.column_id = fkc.parent_column_id
    JOIN sys.columns AS c2
      ON c2.object_id = fkc.referenced_object_id AND c2.column_id = fkc.referenced_column_id
    WHERE fk.parent_object_id = OBJECT_ID(QUOTENAME(:schema) + '.' + QUOTENAME(:table))
    ORDER BY fk.name, fkc.constraint_column_id
""")


def format_column(
    name: str,
    data_type: str,
    is_nullable: str,
    max_length: Optional[int],
    precision: Optional[int],
    scale: Optional[int],
) -> str:
    """
    Render one INFORMATION_SCHEMA.COLUMNS row as ``Name NVARCHAR(100) NOT NULL``.

    Args:
        name: Column name
        data_type: DATA_TYPE value (e.g., nvarchar)
        is_nullable: IS_NULLABLE value ("YES" or "NO")
        max_length: CHARACTER_MAXIMUM_LENGTH (-1 means MAX)
        precision: NUMERIC_PRECISION
        scale: NUMERIC_SCALE

    Returns:
        Column summary string
    """
    type_display = data_type.upper()

    if max_length is not None and (max_length > 0 or max_length == UNBOUNDED_LENGTH):
        length = "MAX" if max_length == UNBOUNDED_LENGTH else str(max_length)
        type_display += f"({length})"
    elif precision is not None and precision > 0:
        if scale is None:
            type_display += f"({precision})"
        else:
            type_display += f"({precision},{scale})"

    nullable = "NULL" if (is_nullable or "").upper() == "YES" else "NOT NULL"
    return f"{name} {type_display} {nullable}"


def format_foreign_key(
    constraint_name: str,
    referencing_column: str,
    referenced_schema: Optional[str],
    referenced_table: str,
    referenced_column: str,
) -> str:
    """Render one foreign key column pair as ``FK_x: col → schema.table(refcol)``."""
    target = referenced_table
    if referenced_schema:
        target = f"{referenced_schema}.{referenced_table}"
    return f"{constraint_name}: {referencing_column} → {target}({referenced_column})"


def distinct_ignore_case(names: list[str]) -> list[str]:
    """Drop names already seen under case-insensitive comparison, keeping the first."""
    seen: set[str] = set()
    result = []
    for name in names:
        key = name.casefold()
        if key not in seen:
            seen.add(key)
            result.append(name)
    return result


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


class CatalogReader:
    """Table listing and table description from the SQL Server catalog.

    Errors from the database are not caught here; listing and describing are
    setup operations and their failures propagate to the caller.
    """

    def __init__(self, connection: "DatabaseConnection", default_schema: str = "dbo"):
        """
        Initialize catalog reader.

        Args:
            connection: Database connection manager
            default_schema: Schema used when list_tables gets a blank name
        """
        self.connection = connection
        self.default_schema = default_schema

    async def list_tables(self, schema: Optional[str] = None) -> list[TableRef]:
        """
        List the base tables of a schema with approximate row counts.

        Args:
            schema: Schema name (blank or None for the default schema)

        Returns:
            Tables ordered by name; empty when the schema has none
        """
        if schema is None or not schema.strip():
            schema = self.default_schema

        async with self.connection.get_connection() as conn:
            result = await conn.execute(LIST_TABLES_SQL, {"schema": schema})
            rows = result.fetchall()

        tables = [
            TableRef(
                schema=row[0],
                name=row[1],
                approx_row_count=_optional_int(row[2]),
            )
            for row in rows
        ]
        logger.debug(f"Listed {len(tables)} table(s) in schema {schema}")
        return tables

    async def describe_table(self, schema: str, table: str) -> TableDetail:
        """
        Describe columns, keys and foreign keys of a table.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            Table detail; every facet is empty when the table does not exist

        Raises:
            InvalidInputError: If schema or table is blank
        """
        if schema is None or not schema.strip():
            raise InvalidInputError("schema required")
        if table is None or not table.strip():
            raise InvalidInputError("table required")

        params = {"schema": schema, "table": table}

        async with self.connection.get_connection() as conn:
            column_rows = (await conn.execute(COLUMNS_SQL, params)).fetchall()
            pk_rows = (await conn.execute(PRIMARY_KEY_SQL, params)).fetchall()
            unique_rows = (await conn.execute(UNIQUE_SQL, params)).fetchall()
            fk_rows = (await conn.execute(FOREIGN_KEYS_SQL, params)).fetchall()

        columns = [
            format_column(
                name=row[0],
                data_type=row[1],
                is_nullable=row[2],
                max_length=_optional_int(row[3]),
                precision=_optional_int(row[4]),
                scale=_optional_int(row[5]),
            )
            for row in column_rows
        ]
        foreign_keys = [
            format_foreign_key(row[0], row[1], row[2], row[3], row[4])
            for row in fk_rows
        ]

        if not columns:
            logger.debug(f"No columns found for {schema}.{table}")

        return TableDetail(
            schema=schema,
            name=table,
            columns=columns,
            primary_key=[row[0] for row in pk_rows],
            unique_indexes=distinct_ignore_case([row[0] for row in unique_rows]),
            foreign_keys=foreign_keys,
        )
