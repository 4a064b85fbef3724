"""Core domain layer for avyquery."""

from avyquery.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    ClientConfig,
    NotFound,
    QueryResult,
    QueryStatus,
)
from avyquery.core.errors import (
    AggregateError,
    QueryError,
    TransportError,
    ValidationError,
)
from avyquery.core.interfaces import (
    IErrorReporter,
    IFetcher,
    IKeyBuilder,
    IValidator,
)
from avyquery.core.services import (
    AggregateState,
    AggregateStatus,
    CacheStore,
    Query,
    QueryClient,
    aggregate,
)

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "ClientConfig",
    "NotFound",
    "QueryResult",
    "QueryStatus",
    # Errors
    "QueryError",
    "TransportError",
    "ValidationError",
    "AggregateError",
    # Interfaces
    "IErrorReporter",
    "IFetcher",
    "IKeyBuilder",
    "IValidator",
    # Services
    "CacheStore",
    "Query",
    "QueryClient",
    "AggregateState",
    "AggregateStatus",
    "aggregate",
]
