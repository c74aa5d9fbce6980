"""Query service connection.

Architecture:
    A connection owns everything scoped to one service identity:
    - its configuration (host, tenant, dataset, cache settings)
    - the terminal transport
    - its own MetadataCache, wrapped by MetadataCacheMiddleware in the chain
      used for metadata requests
    - a PaginationDriver for queries

    Queries and metadata requests go through separate chains so the cache
    middleware is only composed where it applies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..core.exceptions import MalformedResponseError, TransportError
from ..cursor import ResultCursor
from ..models import CacheKey
from ..runtime.cache import MetadataCache, MetadataCacheMiddleware
from ..runtime.pagination import PaginationDriver, raise_for_response
from ..runtime.rest import (
    RequestsTransport,
    Transport,
    TransportChain,
    build_metadata_request,
)
from .config import ConnectionConfig

logger = logging.getLogger(__name__)


class QueryServiceConnection:
    """Entry point for running queries and reading metadata."""

    def __init__(self, config: ConnectionConfig, transport: Transport | None = None) -> None:
        """Initialize connection.

        Args:
            config: Connection settings
            transport: Terminal transport (defaults to a RequestsTransport
                built from the config)
        """
        self.config = config
        self._transport = transport or RequestsTransport(
            timeout=config.timeout,
            default_headers={"User-Agent": config.user_agent},
        )
        self.metadata_cache = MetadataCache(
            ttl=config.metadata_cache_ttl_seconds,
            max_size=config.metadata_cache_max_size,
        )
        self._query_chain = TransportChain(self._transport)
        self._metadata_chain = TransportChain(
            self._transport,
            [MetadataCacheMiddleware(self.metadata_cache, self.metadata_cache_key)],
        )
        self._driver = PaginationDriver(
            self._query_chain,
            config.base_url,
            headers=config.headers,
            max_pages=config.max_pages,
        )
        self._closed = False

    def metadata_cache_key(self) -> CacheKey:
        """Cache key for the current connection identity."""
        return CacheKey(
            host=self.config.hostname,
            tenant_id=self.config.tenant_id,
            dataset=self.config.dataset,
        )

    def execute_query(self, sql: str, params: Mapping[str, Any] | None = None) -> ResultCursor:
        """Run ``sql`` and return a cursor over every page of its result.

        See PaginationDriver.fetch_all for the errors raised.
        """
        self._ensure_open()
        return self._driver.fetch_all(sql, params)

    def get_metadata(self, params: Mapping[str, Any] | None = None) -> Any:
        """Fetch the metadata catalogue, served from the cache when fresh.

        Returns:
            Decoded JSON metadata document

        Raises:
            AuthError: The service rejected the credentials
            TransportError: The transport failed with an I/O error
            MalformedResponseError: The body is not valid JSON
            QueryServiceError: Any other unsuccessful response
        """
        self._ensure_open()
        request = build_metadata_request(self.config.base_url, params, self.config.headers)
        try:
            response = self._metadata_chain.proceed(request)
        except OSError as e:
            raise TransportError(str(e)) from e
        raise_for_response(response)
        body = response.text()
        try:
            return json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(f"Metadata body is not valid JSON: {e}") from e

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()
        logger.debug("connection_closed", extra={"host": self.config.hostname})

    def __enter__(self) -> QueryServiceConnection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Connection is closed")
