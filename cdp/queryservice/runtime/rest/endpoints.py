"""Request builders for the query service endpoints.

The v1 query endpoint takes the SQL text in a JSON body and paging options
(``limit``, ``offset``, ``orderby``) in the query string. When a page carries
a continuation token the next batch is read from the v2 batch endpoint
instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from ...core.constants import (
    ANSI_SQL_URL,
    BATCH_URL,
    CDP_URL,
    JSON_CONTENT,
    METADATA_URL,
    OFFSET_PARAM,
)
from ...core.enums import RequestKind
from .transport import Request


def _query_string(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset options; everything else goes to the query string as-is."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def build_query_request(
    base_url: str,
    sql: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Request:
    """Build the initial request for a query."""
    if not sql or not sql.strip():
        raise ValueError("Query text must not be empty")
    return Request(
        method="POST",
        url=f"{base_url}{CDP_URL}{ANSI_SQL_URL}",
        kind=RequestKind.QUERY,
        params=_query_string(params),
        json_body={"sql": sql},
        headers={"Content-Type": JSON_CONTENT, **(headers or {})},
    )


def build_offset_request(initial: Request, offset: int) -> Request:
    """Re-issue the initial query starting ``offset`` rows further in."""
    params = dict(initial.params)
    params[OFFSET_PARAM] = offset
    return Request(
        method=initial.method,
        url=initial.url,
        kind=RequestKind.NEXT_PAGE,
        params=params,
        json_body=initial.json_body,
        headers=initial.headers,
    )


def build_batch_request(
    base_url: str, token: str, headers: Mapping[str, str] | None = None
) -> Request:
    """Request the batch identified by a continuation token."""
    return Request(
        method="GET",
        url=f"{base_url}{BATCH_URL}/{quote(token, safe='')}",
        kind=RequestKind.NEXT_PAGE,
        headers=dict(headers or {}),
    )


def build_metadata_request(
    base_url: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Request:
    """Build the metadata (table/column catalogue) request."""
    return Request(
        method="GET",
        url=f"{base_url}{CDP_URL}{METADATA_URL}",
        kind=RequestKind.METADATA,
        params=_query_string(params),
        headers=dict(headers or {}),
    )
