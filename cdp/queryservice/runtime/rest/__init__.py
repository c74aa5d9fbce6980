"""REST runtime abstractions."""

from .endpoints import (
    build_batch_request,
    build_metadata_request,
    build_offset_request,
    build_query_request,
)
from .transport import (
    Middleware,
    Request,
    RequestsTransport,
    Response,
    Transport,
    TransportChain,
)

__all__ = [
    "Request",
    "Response",
    "Transport",
    "Middleware",
    "TransportChain",
    "RequestsTransport",
    "build_query_request",
    "build_offset_request",
    "build_batch_request",
    "build_metadata_request",
]
