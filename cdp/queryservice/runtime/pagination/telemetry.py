"""Structured logging for pagination.

This module provides telemetry hooks for the pagination driver, emitting
one structured log record per page and one per completed or failed fetch.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    page_index: int,
    rows: int,
    done: bool | None,
    has_continuation: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a single page received and accepted.

    Args:
        page_index: Zero-based index of the page within the fetch
        rows: Number of rows on the page
        done: Raw done flag from the page (None when absent)
        has_continuation: Whether the page carried a continuation token
        latency_ms: Round-trip latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "page_index": page_index,
            "rows": rows,
            "done": done,
            "has_continuation": has_continuation,
            "latency_ms": latency_ms,
        },
    )


def log_pagination_complete(
    *,
    pages: int,
    total_rows: int,
    columns: int,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a multi-page fetch."""
    logger.info(
        "pagination_complete",
        extra={
            "pages": pages,
            "total_rows": total_rows,
            "columns": columns,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_pagination_error(
    *,
    page_index: int,
    error_type: str,
    error_message: str,
    discarded_rows: int = 0,
) -> None:
    """Log a fetch aborted by an error.

    Args:
        page_index: Zero-based index of the page being fetched when it failed
        error_type: Exception class name (e.g. "AuthError")
        error_message: Exception message
        discarded_rows: Rows accumulated before the failure, now dropped
    """
    logger.error(
        "pagination_error",
        extra={
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
            "discarded_rows": discarded_rows,
        },
    )
