"""Core enumerations shared by the transport, pagination and cursor layers.

Architecture:
    ColumnType normalizes the type names the query service declares in page
    metadata and owns the conversion from raw JSON cells to Python values.
    RequestKind tags outgoing requests so middleware can decide which ones
    they apply to.

Design Decisions:
    - String enums: declared type names compare and serialize as plain text
    - Aliases resolved once in ``from_declared`` so the cursor only sees
      canonical members
    - ``None`` cells never go through a converter
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class RequestKind(str, Enum):
    """Classes of requests sent to the query service."""

    QUERY = "query"
    NEXT_PAGE = "next_page"
    METADATA = "metadata"


class ColumnType(str, Enum):
    """Canonical column types with JDBC-style type codes."""

    VARCHAR = "VARCHAR"
    DECIMAL = "DECIMAL"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    OTHER = "OTHER"

    @classmethod
    def from_declared(cls, declared: str | None) -> ColumnType:
        """Resolve a server-declared type name (case-insensitive).

        Args:
            declared: Type name from page metadata, e.g. ``"decimal"`` or
                ``"TIMESTAMP WITH TIME ZONE"``

        Returns:
            Matching ColumnType, or OTHER when the name is unknown
        """
        if not declared:
            return cls.OTHER
        name = declared.strip().upper()
        # "TIMESTAMP WITH TIME ZONE", "VARCHAR(255)" and friends
        name = name.split("(", 1)[0].split(" ", 1)[0]
        return _ALIASES.get(name, cls.OTHER)

    @classmethod
    def infer(cls, value: Any) -> ColumnType:
        """Infer a column type from the JSON shape of a raw value."""
        # bool first: bool is a subclass of int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.BIGINT
        if isinstance(value, float):
            return cls.DOUBLE
        if isinstance(value, str):
            return cls.VARCHAR
        return cls.OTHER

    @property
    def type_code(self) -> int:
        """java.sql.Types code for this type."""
        return _TYPE_CODES[self]

    def convert(self, value: Any) -> Any:
        """Convert a raw JSON cell to the Python value for this type.

        Raises:
            ValueError: If the cell cannot be represented as this type
        """
        if value is None:
            return None
        return _CONVERTERS[self](value)


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert boolean {value!r} to DECIMAL")
    try:
        # str() first so floats keep their shortest repr instead of binary noise
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Cannot convert {value!r} to DECIMAL") from e


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert boolean {value!r} to INTEGER")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Cannot convert {value!r} to INTEGER without loss")
        return int(value)
    if isinstance(value, str):
        return int(_to_decimal(value).to_integral_exact())
    return int(value)


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert boolean {value!r} to DOUBLE")
    return float(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "t", "1", "yes"):
            return True
        if text in ("false", "f", "0", "no"):
            return False
    raise ValueError(f"Cannot convert {value!r} to BOOLEAN")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        return datetime.fromtimestamp(value / 1000.0, tz=UTC)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text.replace(" ", "T", 1))


def _to_date(value: Any) -> date:
    text = str(value).strip()
    if len(text) > 10:
        return _to_datetime(text).date()
    return date.fromisoformat(text)


def _to_time(value: Any) -> time:
    return time.fromisoformat(str(value).strip())


_ALIASES: dict[str, ColumnType] = {
    "VARCHAR": ColumnType.VARCHAR,
    "CHAR": ColumnType.VARCHAR,
    "STRING": ColumnType.VARCHAR,
    "TEXT": ColumnType.VARCHAR,
    "DECIMAL": ColumnType.DECIMAL,
    "NUMERIC": ColumnType.DECIMAL,
    "NUMBER": ColumnType.DECIMAL,
    "INTEGER": ColumnType.INTEGER,
    "INT": ColumnType.INTEGER,
    "SMALLINT": ColumnType.INTEGER,
    "TINYINT": ColumnType.INTEGER,
    "BIGINT": ColumnType.BIGINT,
    "LONG": ColumnType.BIGINT,
    "DOUBLE": ColumnType.DOUBLE,
    "FLOAT": ColumnType.DOUBLE,
    "REAL": ColumnType.DOUBLE,
    "BOOLEAN": ColumnType.BOOLEAN,
    "BOOL": ColumnType.BOOLEAN,
    "DATE": ColumnType.DATE,
    "TIME": ColumnType.TIME,
    "TIMESTAMP": ColumnType.TIMESTAMP,
    "DATETIME": ColumnType.TIMESTAMP,
}

_TYPE_CODES: dict[ColumnType, int] = {
    ColumnType.VARCHAR: 12,
    ColumnType.DECIMAL: 3,
    ColumnType.INTEGER: 4,
    ColumnType.BIGINT: -5,
    ColumnType.DOUBLE: 8,
    ColumnType.BOOLEAN: 16,
    ColumnType.DATE: 91,
    ColumnType.TIME: 92,
    ColumnType.TIMESTAMP: 93,
    ColumnType.OTHER: 1111,
}

_CONVERTERS = {
    ColumnType.VARCHAR: _to_str,
    ColumnType.DECIMAL: _to_decimal,
    ColumnType.INTEGER: _to_int,
    ColumnType.BIGINT: _to_int,
    ColumnType.DOUBLE: _to_float,
    ColumnType.BOOLEAN: _to_bool,
    ColumnType.DATE: _to_date,
    ColumnType.TIME: _to_time,
    ColumnType.TIMESTAMP: _to_datetime,
    ColumnType.OTHER: lambda value: value,
}
