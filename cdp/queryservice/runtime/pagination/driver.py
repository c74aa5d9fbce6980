"""Pagination driver assembling multi-page query results into one cursor.

This module provides the PaginationDriver that issues a query, follows the
service's continuation signal page by page and builds a ResultCursor from
the accumulated rows.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from time import perf_counter
from typing import Any

from ...core.constants import OFFSET_PARAM
from ...core.exceptions import MalformedResponseError, QueryServiceError, TransportError
from ...cursor import ResultCursor
from ...models import ColumnMeta, Page
from ..rest.endpoints import build_batch_request, build_offset_request, build_query_request
from ..rest.transport import Request, Transport
from .parser import PageParser, raise_for_response
from .telemetry import log_page_fetched, log_pagination_complete, log_pagination_error


class PaginationDriver:
    """Fetches every page of a query and assembles one ordered row stream.

    The driver continues only when a page says ``done: false`` explicitly.
    A missing flag ends the fetch just like ``done: true``, whatever the
    size of the page. The first page that defines columns fixes the schema;
    a later page declaring different columns aborts the fetch.
    """

    def __init__(
        self,
        chain: Transport,
        base_url: str,
        *,
        parser: PageParser | None = None,
        headers: Mapping[str, str] | None = None,
        max_pages: int | None = None,
    ) -> None:
        """Initialize pagination driver.

        Args:
            chain: Transport chain every page request goes through
            base_url: Query service base URL (scheme and host)
            parser: Page parser (defaults to PageParser())
            headers: Extra headers sent with every page request
            max_pages: Upper bound on pages per fetch (None = unlimited)
        """
        self._chain = chain
        self._base_url = base_url.rstrip("/")
        self._parser = parser or PageParser()
        self._headers = dict(headers or {})
        self._max_pages = max_pages

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> ResultCursor:
        """Run ``query`` and return a cursor over all of its rows.

        Args:
            query: SQL text
            params: Paging options (``limit``, ``offset``, ``orderby``); other
                keys are forwarded as query string parameters

        Returns:
            ResultCursor over the concatenated rows of every page

        Raises:
            AuthError: The service rejected the credentials
            TransportError: The transport failed with an I/O error
            MalformedResponseError: A page could not be decoded or redefined
                the schema
            QueryServiceError: Any other unsuccessful response
        """
        initial = build_query_request(self._base_url, query, params, self._headers)
        start_offset = int((params or {}).get(OFFSET_PARAM) or 0)

        # Local until the fetch succeeds; an error drops everything
        rows: list[tuple[Any, ...]] = []
        schema: tuple[ColumnMeta, ...] = ()
        page_index = 0
        request = initial
        started = perf_counter()

        try:
            while True:
                page_started = perf_counter()
                page = self._fetch_page(request, schema or None)

                if not schema:
                    schema = page.columns
                elif page.declared:
                    self._check_schema(schema, page.columns, page_index)

                rows.extend(page.rows)
                log_page_fetched(
                    page_index=page_index,
                    rows=page.row_count,
                    done=page.done,
                    has_continuation=page.continuation is not None,
                    latency_ms=(perf_counter() - page_started) * 1000.0,
                )

                if not page.has_more:
                    break
                page_index += 1
                if self._max_pages is not None and page_index >= self._max_pages:
                    raise MalformedResponseError(
                        f"Query did not complete within {self._max_pages} pages"
                    )
                request = self._next_request(initial, page, start_offset + len(rows))
        except QueryServiceError as e:
            log_pagination_error(
                page_index=page_index,
                error_type=type(e).__name__,
                error_message=str(e),
                discarded_rows=len(rows),
            )
            raise

        log_pagination_complete(
            pages=page_index + 1,
            total_rows=len(rows),
            columns=len(schema),
            total_latency_ms=(perf_counter() - started) * 1000.0,
        )
        return ResultCursor(rows, schema)

    def _fetch_page(self, request: Request, schema: Sequence[ColumnMeta] | None) -> Page:
        try:
            response = self._chain.proceed(request)
        except OSError as e:
            # requests.RequestException is an OSError too
            raise TransportError(str(e)) from e
        raise_for_response(response)
        return self._parser.parse(response, schema)

    def _next_request(self, initial: Request, page: Page, offset: int) -> Request:
        if page.continuation is not None:
            return build_batch_request(self._base_url, page.continuation, self._headers)
        if page.row_count == 0:
            raise MalformedResponseError(
                "Page reported more results but carried neither rows nor a continuation token"
            )
        return build_offset_request(initial, offset)

    @staticmethod
    def _check_schema(
        schema: tuple[ColumnMeta, ...], columns: tuple[ColumnMeta, ...], page_index: int
    ) -> None:
        if len(schema) != len(columns) or not all(
            recorded.same_shape(current) for recorded, current in zip(schema, columns)
        ):
            raise MalformedResponseError(
                f"Page {page_index} redefines the result columns: "
                f"expected {[c.name for c in schema]}, got {[c.name for c in columns]}"
            )
