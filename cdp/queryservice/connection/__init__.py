"""Connection and its configuration."""

from .config import ConnectionConfig
from .connection import QueryServiceConnection

__all__ = ["ConnectionConfig", "QueryServiceConnection"]
