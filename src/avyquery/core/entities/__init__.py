"""Domain entities for avyquery."""

from avyquery.core.entities.cache_config import CacheConfig, ClientConfig
from avyquery.core.entities.cache_entry import CacheEntry
from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.entities.outcome import Failed, FetchOutcome, Invalid, Valid
from avyquery.core.entities.query_result import (
    NotFound,
    QueryResult,
    QueryStatus,
    is_not_found,
)

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CacheConfig",
    "ClientConfig",
    "QueryResult",
    "QueryStatus",
    "NotFound",
    "is_not_found",
    "Valid",
    "Invalid",
    "Failed",
    "FetchOutcome",
]
