"""Execution of caller-supplied SQL."""

import logging
import time
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy.exc import DBAPIError

from db_lab.models.query import EMPTY_SQL_ERROR, QueryOutcome
from db_lab.models.row import Row

if TYPE_CHECKING:
    from db_lab.core.connection import DatabaseConnection

logger = logging.getLogger(__name__)


def describe_error(exc: Exception) -> str:
    """Message text of the driver error behind ``exc``, without SQLAlchemy's wrapping."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        message = str(exc.orig)
    else:
        message = str(exc)
    return message or type(exc).__name__


class QueryExecutor:
    """Runs arbitrary SQL text and reports the outcome as data.

    Unlike the catalog reader, this never raises for a failing statement:
    syntax errors, permission errors, constraint violations and lost
    connections all come back as a failed ``QueryOutcome``. Task
    cancellation is not an error and propagates normally.

    A batch is read on the driver cursor: count-only results are skipped up
    to the first result set, and the remaining results are drained so that
    errors raised by later statements are not lost.
    """

    def __init__(self, connection: "DatabaseConnection"):
        """
        Initialize query executor.

        Args:
            connection: Database connection manager
        """
        self.connection = connection

    async def run(self, sql: Optional[str]) -> QueryOutcome:
        """
        Execute SQL and return its rows or affected-row count.

        Args:
            sql: Any statement or batch (SELECT, DDL, DML)

        Returns:
            Query outcome with rows, message, duration and error
        """
        if sql is None or not sql.strip():
            return QueryOutcome.failure(EMPTY_SQL_ERROR)

        try:
            async with self.connection.get_connection() as conn:
                raw_connection = await conn.get_raw_connection()
                cursor = await raw_connection.driver_connection.cursor()
                try:
                    outcome = await _read_batch(cursor, sql)
                finally:
                    await cursor.close()

            logger.debug(f"{outcome.message} ({outcome.duration_ms:.1f} ms)")
            return outcome

        except Exception as e:
            error = describe_error(e)
            logger.warning(f"Query failed: {error}")
            return QueryOutcome.failure(error)


async def _read_batch(cursor: Any, sql: str) -> QueryOutcome:
    start_time = time.perf_counter()

    # Raw driver execution: no bind-parameter parsing of the text
    await cursor.execute(sql)

    affected = 0
    while cursor.description is None:
        # -1 means the driver has no count (e.g., DDL)
        affected += max(cursor.rowcount, 0)
        if not await cursor.nextset():
            return QueryOutcome.from_affected(affected, _elapsed_ms(start_time))

    columns = [column[0] for column in cursor.description]
    rows = [Row.from_record(columns, record) for record in await cursor.fetchall()]

    # Errors of later statements are raised when their results are reached
    while await cursor.nextset():
        if cursor.description is not None:
            await cursor.fetchall()

    return QueryOutcome.from_rows(rows, _elapsed_ms(start_time))


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000
