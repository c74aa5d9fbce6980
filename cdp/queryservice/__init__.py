"""CDP Query Service - paginated, cached query client with a forward-only cursor."""

from .connection import ConnectionConfig, QueryServiceConnection
from .core import (
    AuthError,
    CacheError,
    ColumnType,
    MalformedResponseError,
    OutOfRangeError,
    QueryServiceError,
    RequestKind,
    TransportError,
)
from .cursor import CursorState, ResultCursor
from .models import CachedEntry, CacheKey, ColumnMeta, Page
from .runtime import (
    MetadataCache,
    MetadataCacheMiddleware,
    PageParser,
    PaginationDriver,
    Request,
    RequestsTransport,
    Response,
    TransportChain,
)

__version__ = "0.1.0"

__all__ = [
    # Connection
    "ConnectionConfig",
    "QueryServiceConnection",
    # Cursor
    "ResultCursor",
    "CursorState",
    # Models
    "CacheKey",
    "CachedEntry",
    "ColumnMeta",
    "Page",
    # Runtime
    "MetadataCache",
    "MetadataCacheMiddleware",
    "PageParser",
    "PaginationDriver",
    "Request",
    "RequestsTransport",
    "Response",
    "TransportChain",
    # Enums
    "ColumnType",
    "RequestKind",
    # Exceptions
    "QueryServiceError",
    "AuthError",
    "TransportError",
    "MalformedResponseError",
    "CacheError",
    "OutOfRangeError",
]
