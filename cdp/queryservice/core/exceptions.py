"""Custom exception hierarchy."""

from __future__ import annotations


class QueryServiceError(Exception):
    """Base exception for all library errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(QueryServiceError):
    """Server rejected the request credentials (401/403).

    The message is the error text extracted from the response body.
    """

    pass


class TransportError(QueryServiceError):
    """Underlying I/O failure while talking to the query service.

    The original failure message is kept verbatim.
    """

    pass


class MalformedResponseError(QueryServiceError):
    """Response body is not a well-formed page.

    Also raised when a page after the first redefines the column metadata.
    """

    pass


class CacheError(QueryServiceError):
    """Metadata cache read/write failure.

    Handled inside the cache; callers only observe a cache miss.
    """

    pass


class OutOfRangeError(QueryServiceError, IndexError):
    """Cursor accessor used outside a positioned row or with an unknown column."""

    pass
