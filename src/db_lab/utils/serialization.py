"""JSON serialization of adapter results using orjson.

orjson already handles datetime, date and time (ISO 8601 strings). Row
values can also be ``bytes`` from binary columns, which need a default
handler.
"""

import base64
import datetime
import decimal
from typing import Any

import orjson


def _default_handler(obj: Any) -> Any:
    """
    Serialize types orjson doesn't handle natively.

    Raises:
        TypeError: If object cannot be serialized
    """
    # binary/varbinary - try UTF-8 decode, fall back to base64
    if isinstance(obj, (bytes, bytearray, memoryview)):
        data = bytes(obj)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return base64.b64encode(data).decode("ascii")

    if isinstance(obj, decimal.Decimal):
        return str(obj)

    if isinstance(obj, datetime.timedelta):
        return obj.total_seconds()

    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def dumps(obj: Any) -> str:
    """
    Serialize an object to an indented JSON string.

    Args:
        obj: Object to serialize (plain data, e.g. from ``model_dump()``)

    Returns:
        JSON string
    """
    return orjson.dumps(
        obj, default=_default_handler, option=orjson.OPT_INDENT_2
    ).decode("utf-8")
