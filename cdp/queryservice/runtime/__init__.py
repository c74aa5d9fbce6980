"""Runtime components: transport chain, metadata cache and pagination."""

from .cache import MetadataCache, MetadataCacheMiddleware
from .pagination import PageParser, PaginationDriver
from .rest import Request, RequestsTransport, Response, TransportChain

__all__ = [
    "MetadataCache",
    "MetadataCacheMiddleware",
    "PageParser",
    "PaginationDriver",
    "Request",
    "RequestsTransport",
    "Response",
    "TransportChain",
]
