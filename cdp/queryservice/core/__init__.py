"""Core components."""

from .enums import ColumnType, RequestKind
from .exceptions import (
    AuthError,
    CacheError,
    MalformedResponseError,
    OutOfRangeError,
    QueryServiceError,
    TransportError,
)

__all__ = [
    "ColumnType",
    "RequestKind",
    "QueryServiceError",
    "AuthError",
    "TransportError",
    "MalformedResponseError",
    "CacheError",
    "OutOfRangeError",
]
