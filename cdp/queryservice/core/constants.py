"""Query service URLs, header names and connection defaults.

Centralized here so the endpoint builders, the cache middleware and the
connection config agree on the same values.
"""

from __future__ import annotations

# REST paths
CDP_URL = "/api/v1"
ANSI_SQL_URL = "/query"
METADATA_URL = "/metadata"
# Continuation batches are served by the v2 query endpoint: /api/v2/query/{batch_id}
BATCH_URL = "/api/v2/query"

JSON_CONTENT = "application/json"

# Header added to responses synthesized from the metadata cache
CACHE_MARKER_HEADER = "from-local-cache"
CACHE_MARKER_VALUE = "true"

# Connection defaults
DEFAULT_SCHEME = "https"
DEFAULT_METADATA_CACHE_TTL_MS = 10 * 60 * 1000
DEFAULT_METADATA_CACHE_MAX_SIZE = 10
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "cdp-queryservice-python"

# Query string parameters understood by the v1 query endpoint
LIMIT_PARAM = "limit"
OFFSET_PARAM = "offset"
ORDER_BY_PARAM = "orderby"

AUTH_FAILURE_STATUSES = frozenset({401, 403})
