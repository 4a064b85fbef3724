"""Weather product queries of the National Avalanche Center API."""

import functools
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.services.query import Query
from avyquery.core.services.query_client import QueryClient
from avyquery.schemas.weather import Weather, weather_validator

NAMESPACE = "weather-forecast"


def query_key(client: QueryClient, host: str, forecast_id: int) -> CacheKey:
    return client.build_key(NAMESPACE, {"host": host, "forecast": forecast_id})


async def fetch_weather_forecast(fetcher: IFetcher, host: str, forecast_id: int) -> Any:
    return await fetcher.get(f"{host}/v2/public/product/{forecast_id}", what="weather forecast")


def weather_forecast_query(client: QueryClient, forecast_id: int | None = None) -> Query[Weather]:
    """Create the query for a weather product.

    The query stays disabled (IDLE) until a product id is known.
    """
    host = client.hosts.national_avalanche_center_host
    product_id = forecast_id or 0
    return client.query(
        query_key(client, host, product_id),
        functools.partial(fetch_weather_forecast, client.fetcher, host, product_id),
        weather_validator,
        enabled=bool(forecast_id),
        tags={"forecastId": product_id},
    )


async def prefetch_weather_forecast(client: QueryClient, forecast_id: int) -> None:
    host = client.hosts.national_avalanche_center_host
    await client.prefetch(
        query_key(client, host, forecast_id),
        functools.partial(fetch_weather_forecast, client.fetcher, host, forecast_id),
        weather_validator,
        tags={"forecastId": forecast_id},
    )
