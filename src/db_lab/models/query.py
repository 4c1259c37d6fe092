"""Query outcome model."""

import datetime
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_validator,
)

from db_lab.models.row import Row

EMPTY_SQL_ERROR = "SQL is empty."
FAILURE_MESSAGE = "Error executing query."


class QueryOutcome(BaseModel):
    """Result of running caller-supplied SQL.

    Three shapes are possible:

    - the statement produced a result set (``rows`` may still be empty)
    - the statement produced no result set; ``message`` carries the
      affected-row count and ``rows`` is empty
    - the statement failed; ``succeeded`` is False and ``error`` holds the
      cause
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rows: list[Row] = Field(default_factory=list, description="Result rows")
    message: Optional[str] = Field(None, description="Human-readable summary")
    duration_ms: float = Field(
        default=0.0, ge=0, description="Execute/read time in milliseconds"
    )
    succeeded: bool = Field(default=True, description="Whether the SQL ran")
    error: Optional[str] = Field(None, description="Failure cause when not succeeded")

    @model_validator(mode="after")
    def _check_shape(self) -> "QueryOutcome":
        if self.succeeded and self.error:
            raise ValueError("a successful outcome cannot carry an error")
        if not self.succeeded and self.rows:
            raise ValueError("a failed outcome cannot carry rows")
        return self

    @field_serializer("rows")
    def _serialize_rows(self, rows: list[Row]) -> list[dict[str, Any]]:
        return [row.to_dict() for row in rows]

    @classmethod
    def from_rows(cls, rows: list[Row], duration_ms: float) -> "QueryOutcome":
        """Outcome for a statement that returned a result set."""
        if rows:
            message = f"Returned {len(rows)} row(s)."
        else:
            message = "Command completed (no rows)."
        return cls(rows=rows, message=message, duration_ms=duration_ms)

    @classmethod
    def from_affected(cls, affected: int, duration_ms: float) -> "QueryOutcome":
        """Outcome for a statement that returned no result set."""
        return cls(message=f"({affected} row(s) affected)", duration_ms=duration_ms)

    @classmethod
    def failure(cls, error: str, message: str = FAILURE_MESSAGE) -> "QueryOutcome":
        """Outcome for SQL that could not be run."""
        return cls(succeeded=False, message=message, error=error)

    @property
    def duration(self) -> datetime.timedelta:
        """Elapsed execute/read time."""
        return datetime.timedelta(milliseconds=self.duration_ms)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> list[str]:
        """Column names of the result set, taken from the first row."""
        if not self.rows:
            return []
        return self.rows[0].columns

    def get_column_values(self, column: str) -> list[Any]:
        """Extract all values for a specific column (case-insensitive)."""
        return [row.get(column) for row in self.rows]

    @property
    def status_line(self) -> str:
        """One-line summary suitable for a status bar."""
        if not self.succeeded:
            return f"ERROR: {self.error}"
        return f"{self.message} in {self.duration_ms:,.0f} ms"
