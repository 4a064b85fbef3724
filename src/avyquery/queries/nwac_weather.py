"""NWAC mountain weather forecast queries.

The forecast only exists for the NWAC avalanche center: for any other
center the query is the ignore sentinel and never touches the network.
"""

import functools
from datetime import datetime
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.services.query import Query
from avyquery.core.services.query_client import QueryClient
from avyquery.schemas.nwac_weather import NWACWeatherForecast, nwac_weather_forecast_validator
from avyquery.utils.dates import (
    RequestedTime,
    nominal_nwac_weather_forecast_date,
    requested_time_to_utc,
    to_atom,
)

NAMESPACE = "nwac-weather"
CENTER_ID = "NWAC"


def query_key(client: QueryClient, nwac_host: str, zone_id: int, requested_time: datetime) -> CacheKey:
    return client.build_key(
        NAMESPACE,
        {
            "host": nwac_host,
            "zone_id": zone_id,
            "requestedTime": nominal_nwac_weather_forecast_date(requested_time),
        },
    )


async def fetch_nwac_weather_forecast(
    fetcher: IFetcher, nwac_host: str, zone_id: int, requested_time: datetime
) -> Any:
    """Fetch the raw forecast published for a zone at a point in time."""
    return await fetcher.get(
        f"{nwac_host}/api/v1/mountain-weather-region-forecast",
        {"zone_id": zone_id, "published_datetime": to_atom(requested_time)},
        what="NWAC weather forecast",
    )


def nwac_weather_forecast_query(
    client: QueryClient,
    center_id: str,
    zone_id: int,
    requested_time: RequestedTime,
) -> Query[NWACWeatherForecast]:
    """Create the forecast query for a zone of ``center_id``.

    Args:
        client: The session's query client.
        center_id: The avalanche center the screen shows.
        zone_id: NWAC forecast zone.
        requested_time: A datetime, or ``"latest"``.

    Returns:
        The query; the ignore sentinel unless ``center_id`` is NWAC.
    """
    host = client.hosts.nwac_host
    date = requested_time_to_utc(requested_time, client.store.now())
    key = query_key(client, host, zone_id, date)
    return client.query(
        key,
        functools.partial(fetch_nwac_weather_forecast, client.fetcher, host, zone_id, date),
        nwac_weather_forecast_validator,
        provider=center_id,
        scope=CENTER_ID,
        tags={"zone_id": zone_id},
    )


async def prefetch_nwac_weather_forecast(
    client: QueryClient, zone_id: int, requested_time: datetime
) -> None:
    host = client.hosts.nwac_host
    date = requested_time_to_utc(requested_time)
    await client.prefetch(
        query_key(client, host, zone_id, date),
        functools.partial(fetch_nwac_weather_forecast, client.fetcher, host, zone_id, date),
        nwac_weather_forecast_validator,
        tags={"zone_id": zone_id},
    )
