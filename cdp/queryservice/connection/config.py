"""Connection configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import (
    DEFAULT_METADATA_CACHE_MAX_SIZE,
    DEFAULT_METADATA_CACHE_TTL_MS,
    DEFAULT_SCHEME,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

# JDBC-style property names -> field names
_PROPERTY_ALIASES = {
    "host": "host",
    "loginurl": "host",
    "tenantid": "tenant_id",
    "tenant_id": "tenant_id",
    "orgid": "tenant_id",
    "dataspace": "dataset",
    "dataset": "dataset",
    "metadatacachedurationinms": "metadata_cache_ttl_ms",
    "metadata_cache_ttl_ms": "metadata_cache_ttl_ms",
    "metadatacachemaxsize": "metadata_cache_max_size",
    "metadata_cache_max_size": "metadata_cache_max_size",
    "timeout": "timeout",
    "maxpages": "max_pages",
    "max_pages": "max_pages",
    "useragent": "user_agent",
    "user_agent": "user_agent",
}


class ConnectionConfig(BaseModel):
    """Settings of one query service connection.

    The metadata cache TTL and capacity are per connection: every
    connection builds its own cache from these values.
    """

    host: str = Field(..., min_length=1)
    tenant_id: str | None = None
    dataset: str | None = None
    metadata_cache_ttl_ms: int = Field(default=DEFAULT_METADATA_CACHE_TTL_MS, ge=0)
    metadata_cache_max_size: int = Field(default=DEFAULT_METADATA_CACHE_MAX_SIZE, ge=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_pages: int | None = Field(default=None, ge=1)
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("host")
    @classmethod
    def normalize_host(cls, v: str) -> str:
        """Add the default scheme when missing and drop trailing slashes."""
        if "://" not in v:
            v = f"{DEFAULT_SCHEME}://{v}"
        v = v.rstrip("/")
        if not v.partition("://")[2]:
            raise ValueError(f"Host {v!r} has no network location")
        return v

    @property
    def base_url(self) -> str:
        return self.host

    @property
    def hostname(self) -> str:
        """Host without scheme."""
        return self.host.split("://", 1)[1]

    @property
    def metadata_cache_ttl_seconds(self) -> float:
        return self.metadata_cache_ttl_ms / 1000.0

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> ConnectionConfig:
        """Build a config from JDBC-style properties.

        Keys are matched case-insensitively (``metadataCacheDurationInMs``,
        ``tenantId``, ``dataspace`` ...). Unknown keys are ignored.

        Example:
            >>> ConnectionConfig.from_properties(
            ...     {"host": "example.c360a.salesforce.com", "metadataCacheDurationInMs": "5000"}
            ... ).metadata_cache_ttl_ms
            5000
        """
        values: dict[str, Any] = {}
        for key, value in properties.items():
            field = _PROPERTY_ALIASES.get(str(key).lower())
            if field is not None and value is not None and value != "":
                values[field] = value
        return cls.model_validate(values)
