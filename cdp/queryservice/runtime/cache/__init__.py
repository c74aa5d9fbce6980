"""Connection-scoped metadata response cache."""

from .interceptor import MetadataCacheMiddleware
from .metadata_cache import MetadataCache

__all__ = ["MetadataCache", "MetadataCacheMiddleware"]
