"""Data models for query results and the metadata cache.

Architecture:
    Pydantic v2 models for everything decoded from the wire (pages, column
    metadata, cache keys). Models are frozen so a page or a schema cannot be
    changed after the pagination driver has recorded it.

Model Categories:
    - Results: Page, ColumnMeta
    - Wire schema: PagePayload, ColumnDescriptor
    - Cache: CacheKey, CachedEntry
"""

from .cache import CachedEntry, CacheKey
from .column import ColumnMeta
from .page import ColumnDescriptor, Page, PagePayload

__all__ = [
    "CacheKey",
    "CachedEntry",
    "ColumnDescriptor",
    "ColumnMeta",
    "Page",
    "PagePayload",
]
