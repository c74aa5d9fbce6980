"""Metadata cache key and entry models."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class CacheKey(BaseModel):
    """Connection identity used to look up cached metadata.

    Frozen models are hashable, so instances can key a mapping directly.
    """

    host: str = Field(..., min_length=1)
    tenant_id: str | None = None
    dataset: str | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


@dataclass(frozen=True)
class CachedEntry:
    """A cached metadata body and the time it was stored.

    Attributes:
        value: Response body exactly as received
        inserted_at: Timer reading (seconds) at insertion
    """

    value: str
    inserted_at: float

    def is_expired(self, ttl: float, now: float) -> bool:
        """Entry is stale once strictly more than ``ttl`` seconds have passed."""
        return now - self.inserted_at > ttl
