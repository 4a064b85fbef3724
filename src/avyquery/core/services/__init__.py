"""Domain services for avyquery."""

from avyquery.core.services.aggregator import (
    AggregateState,
    AggregateStatus,
    aggregate,
    is_incomplete,
    watch,
)
from avyquery.core.services.cache_store import CacheStore
from avyquery.core.services.query import Query
from avyquery.core.services.query_client import QueryClient

__all__ = [
    "CacheStore",
    "Query",
    "QueryClient",
    # Aggregation
    "AggregateState",
    "AggregateStatus",
    "aggregate",
    "is_incomplete",
    "watch",
]
