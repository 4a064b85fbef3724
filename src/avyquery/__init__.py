"""avyquery - fetch, validate, cache and aggregate avalanche forecast data.

A Python library for loading remote avalanche and weather records with
stale-while-revalidate caching, request de-duplication, schema validation
and a single derived status for screens that depend on several queries.

Example:
    from avyquery import AggregateStatus, HttpxFetcher, QueryClient, aggregate
    from avyquery.queries import (
        nwac_weather_forecast_query,
        weather_forecast_query,
    )

    async with HttpxFetcher() as fetcher, QueryClient(fetcher=fetcher) as client:
        forecast = nwac_weather_forecast_query(client, "NWAC", 1128, "latest")
        weather = weather_forecast_query(client, 117345)

        await forecast.fetch()
        await weather.fetch()

        state = aggregate([forecast.result, weather.result])
        if state.status is AggregateStatus.NOT_FOUND:
            print(f"We could not find the {state.what}.")

Custom queries:
    key = client.build_key("avalanche-center", {"center": "NWAC"})
    query = client.query(
        key,
        functools.partial(fetcher.get, f"{host}/v2/public/avalanche-center/NWAC"),
        SchemaValidator(AvalancheCenter),
        stale_time=timedelta(hours=6),
    )
"""

from avyquery.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    ClientConfig,
    Failed,
    FetchOutcome,
    Invalid,
    NotFound,
    QueryResult,
    QueryStatus,
    Valid,
    is_not_found,
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
    is_incomplete,
    watch,
)
from avyquery.infrastructure import (
    DefaultKeyBuilder,
    HttpxFetcher,
    LoggingErrorReporter,
)
from avyquery.schemas import SchemaValidator

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "ClientConfig",
    "CacheEntry",
    "CacheKey",
    "QueryResult",
    "QueryStatus",
    "NotFound",
    "is_not_found",
    "Valid",
    "Invalid",
    "Failed",
    "FetchOutcome",
    # Errors
    "QueryError",
    "TransportError",
    "ValidationError",
    "AggregateError",
    # Core interfaces
    "IErrorReporter",
    "IFetcher",
    "IKeyBuilder",
    "IValidator",
    # Core services
    "CacheStore",
    "Query",
    "QueryClient",
    # Aggregation
    "AggregateState",
    "AggregateStatus",
    "aggregate",
    "is_incomplete",
    "watch",
    # Infrastructure implementations
    "DefaultKeyBuilder",
    "HttpxFetcher",
    "LoggingErrorReporter",
    # Validation
    "SchemaValidator",
]
