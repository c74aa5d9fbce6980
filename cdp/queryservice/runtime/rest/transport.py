"""Blocking HTTP transport and explicit middleware chain.

Architecture:
    Every request to the query service goes through a TransportChain: an
    ordered tuple of Middleware objects followed by a Transport. Each
    middleware receives the request and the remainder of the chain, and may
    either answer the request itself or forward it with ``chain.proceed``.

Design Decisions:
    - Protocols for Transport and Middleware: tests pass plain fakes
    - Explicit ordered composition instead of registration magic
    - Synchronous: a call blocks until the transport returns; timeouts belong
      to the transport, not to the chain
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests

from ...core.constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ...core.enums import RequestKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    """An outgoing request to the query service."""

    method: str  # "GET" | "POST"
    url: str
    kind: RequestKind = RequestKind.QUERY
    params: Mapping[str, Any] = field(default_factory=dict)
    json_body: Mapping[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


class Response:
    """Status, headers and a body that can be read exactly once as text."""

    def __init__(
        self,
        status: int,
        body: str = "",
        *,
        reason: str = "",
        headers: Mapping[str, str] | None = None,
        request: Request | None = None,
    ) -> None:
        self.status = status
        self.reason = reason
        self.headers: dict[str, str] = dict(headers or {})
        self.request = request
        self._body: str | None = body
        self._consumed = False

    @property
    def is_successful(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    @property
    def consumed(self) -> bool:
        return self._consumed

    def text(self) -> str:
        """Read the body.

        Raises:
            RuntimeError: If the body was already read
        """
        if self._consumed:
            raise RuntimeError("Response body already consumed")
        body = self._body or ""
        self._consumed = True
        self._body = None
        return body

    def __repr__(self) -> str:
        return f"Response(status={self.status}, reason={self.reason!r})"


class Transport(Protocol):
    """Anything that can turn a request into a response."""

    def proceed(self, request: Request) -> Response:
        """Send the request and return the response.

        Raises:
            OSError: On I/O failure (``requests.RequestException`` included)
        """
        ...


class Middleware(Protocol):
    """One request-handling layer of a TransportChain."""

    def handle(self, request: Request, chain: Transport) -> Response:
        """Answer the request, or forward it with ``chain.proceed(request)``."""
        ...


class TransportChain:
    """Ordered middleware in front of a terminal transport.

    Middleware run in the order given; the first one sees the request first.
    """

    def __init__(self, transport: Transport, middlewares: Sequence[Middleware] = ()) -> None:
        self._transport = transport
        self._middlewares = tuple(middlewares)

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return self._middlewares

    def proceed(self, request: Request) -> Response:
        return _ChainLink(self._middlewares, self._transport, 0).proceed(request)


class _ChainLink:
    """The remainder of a chain starting at ``index``."""

    def __init__(
        self, middlewares: tuple[Middleware, ...], transport: Transport, index: int
    ) -> None:
        self._middlewares = middlewares
        self._transport = transport
        self._index = index

    def proceed(self, request: Request) -> Response:
        if self._index < len(self._middlewares):
            rest = _ChainLink(self._middlewares, self._transport, self._index + 1)
            return self._middlewares[self._index].handle(request, rest)
        return self._transport.proceed(request)


class RequestsTransport:
    """Blocking transport backed by a ``requests.Session``."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        default_headers: Mapping[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.default_headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"}
        if default_headers:
            self.default_headers.update(default_headers)

    def proceed(self, request: Request) -> Response:
        headers = {**self.default_headers, **request.headers}
        logger.debug(
            "http_request",
            extra={"method": request.method, "url": request.url, "kind": request.kind.value},
        )
        resp = self.session.request(
            request.method,
            request.url,
            params=dict(request.params) or None,
            json=dict(request.json_body) if request.json_body is not None else None,
            headers=headers,
            timeout=self.timeout,
        )
        return Response(
            resp.status_code,
            resp.text,
            reason=resp.reason or "",
            headers=dict(resp.headers),
            request=request,
        )

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
