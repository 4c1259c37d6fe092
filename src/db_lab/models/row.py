"""Result row model.

Every row coming out of the adapter, whether from a catalog query or from
caller SQL, is a ``Row``: an ordered mapping from column name to a scalar.
Column lookups ignore case, so ``row["one"]`` and ``row["ONE"]`` are the same
cell.
"""

import datetime
import decimal
import uuid
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Union

Scalar = Union[
    None,
    bool,
    int,
    float,
    str,
    datetime.date,
    datetime.time,
    bytes,
]


def to_scalar(value: Any) -> Scalar:
    """
    Normalize a driver value into one of the supported scalar types.

    Args:
        value: Raw value returned by the DBAPI driver

    Returns:
        None, bool, int, float, str, date/datetime/time or bytes
    """
    if value is None or isinstance(
        value, (bool, int, float, str, bytes, datetime.date, datetime.time)
    ):
        return value

    if isinstance(value, decimal.Decimal):
        return float(value)

    # varbinary/image come back as bytearray or memoryview depending on driver
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, uuid.UUID):
        return str(value)

    return str(value)


class Row(Mapping[str, Any]):
    """Immutable, ordered, case-insensitive mapping of column name to value."""

    __slots__ = ("_cells",)

    def __init__(self, items: Iterable[tuple[str, Any]] = ()):
        """
        Build a row from (column, value) pairs.

        A later pair whose name matches an earlier one (ignoring case)
        replaces its value but keeps the original position.
        """
        cells: dict[str, tuple[str, Any]] = {}
        for name, value in items:
            cells[name.casefold()] = (name, value)
        self._cells = cells

    @classmethod
    def from_record(cls, columns: Sequence[str], values: Sequence[Any]) -> "Row":
        """Build a row from a driver record, converting each value to a scalar."""
        return cls(
            (str(column), to_scalar(value)) for column, value in zip(columns, values)
        )

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            return self._cells[key.casefold()][1]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._cells

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Row({self.to_dict()!r})"

    @property
    def columns(self) -> list[str]:
        """Column names in result-set order."""
        return list(self)

    def to_dict(self) -> dict[str, Any]:
        """Plain ``dict`` copy, keyed by the original column names."""
        return {name: value for name, value in self._cells.values()}
