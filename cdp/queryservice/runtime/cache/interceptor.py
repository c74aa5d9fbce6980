"""Middleware answering metadata requests from the connection's cache."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ...core.constants import CACHE_MARKER_HEADER, CACHE_MARKER_VALUE, JSON_CONTENT
from ...core.enums import RequestKind
from ...models import CacheKey
from ..rest.transport import Request, Response, Transport
from .metadata_cache import MetadataCache

logger = logging.getLogger(__name__)


class MetadataCacheMiddleware:
    """Short-circuits metadata requests whose body is already cached.

    On a hit the response is synthesized (status 200 "OK", cache marker
    header, cached body) and the rest of the chain is never called. On a
    miss the request is forwarded; successful bodies are stored, failures
    are returned untouched and never cached.
    """

    def __init__(self, cache: MetadataCache, key_factory: Callable[[], CacheKey]) -> None:
        """Initialize middleware.

        Args:
            cache: Cache owned by the connection
            key_factory: Returns the CacheKey for the current connection identity
        """
        self._cache = cache
        self._key_factory = key_factory

    @property
    def cache(self) -> MetadataCache:
        return self._cache

    def handle(self, request: Request, chain: Transport) -> Response:
        if request.kind is not RequestKind.METADATA:
            return chain.proceed(request)

        key = self._key_factory()
        cached = self._cache.lookup(key)
        if cached is not None:
            logger.debug("metadata_cache_hit", extra={"host": key.host, "tenant_id": key.tenant_id})
            return Response(
                200,
                cached,
                reason="OK",
                headers={CACHE_MARKER_HEADER: CACHE_MARKER_VALUE, "Content-Type": JSON_CONTENT},
                request=request,
            )

        logger.debug("metadata_cache_miss", extra={"host": key.host, "tenant_id": key.tenant_id})
        response = chain.proceed(request)
        if not response.is_successful:
            return response

        body = response.text()
        self._cache.store(key, body)
        logger.info(
            "metadata_cache_store",
            extra={"host": key.host, "tenant_id": key.tenant_id, "size": len(body)},
        )
        return Response(
            response.status,
            body,
            reason=response.reason,
            headers=response.headers,
            request=request,
        )
