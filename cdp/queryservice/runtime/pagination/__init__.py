"""Pagination layer turning paged query responses into one row stream.

Architecture:
    - parser.py: response body -> Page, error text extraction
    - driver.py: page loop, continuation rule, schema checks
    - telemetry.py: structured logs for pages and fetches
"""

from __future__ import annotations

from .driver import PaginationDriver
from .parser import PageParser, extract_error_message, raise_for_response

__all__ = [
    "PaginationDriver",
    "PageParser",
    "extract_error_message",
    "raise_for_response",
]
