"""Weather station time-series queries of the Snowbound API."""

import functools
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.services.query import Query
from avyquery.core.services.query_client import QueryClient
from avyquery.schemas.snowbound import (
    StationTimeSeries,
    SourceIdentifier,
    station_timeseries_validator,
)

NAMESPACE = "station-timeseries"

# Station data loggers report every hour.
STALE_TIME = timedelta(minutes=10)


def query_key(
    client: QueryClient,
    host: str,
    stations: Sequence[int],
    source: str,
    start_date: date,
    end_date: date,
) -> CacheKey:
    return client.build_key(
        NAMESPACE,
        {
            "host": host,
            "stations": sorted(stations),
            "source": source,
            "startDate": start_date,
            "endDate": end_date,
        },
    )


async def fetch_station_timeseries(
    fetcher: IFetcher,
    host: str,
    stations: Sequence[int],
    source: str,
    start_date: date,
    end_date: date,
) -> Any:
    params = {
        "stid": ",".join(str(station) for station in sorted(stations)),
        "source": source,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
    }
    return await fetcher.get(f"{host}/wxdata/getobs", params, what="station time series")


def station_timeseries_query(
    client: QueryClient,
    stations: Sequence[int],
    start_date: date,
    end_date: date,
    source: str = SourceIdentifier.NWAC.value,
) -> Query[StationTimeSeries]:
    """Create the time-series query for a set of stations.

    Disabled while no station is selected.
    """
    host = client.hosts.snowbound_host
    return client.query(
        query_key(client, host, stations, source, start_date, end_date),
        functools.partial(
            fetch_station_timeseries, client.fetcher, host, stations, source, start_date, end_date
        ),
        station_timeseries_validator,
        stale_time=STALE_TIME,
        enabled=bool(stations),
    )
