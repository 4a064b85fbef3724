"""Public observation list queries.

An empty list is a valid result: the center recorded no observations in
the window.
"""

import functools
from datetime import date
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.services.query import Query
from avyquery.core.services.query_client import QueryClient
from avyquery.schemas.observations import ObservationOverview, observation_list_validator

NAMESPACE = "observations"

OBSERVATION_LIST_QUERY = """
query ObservationList($center: String!, $startDate: DateTime!, $endDate: DateTime!) {
  getObservationList(centerId: $center, startDate: $startDate, endDate: $endDate) {
    id
    observerType
    name
    startDate
    locationName
    locationPoint { lat lng }
    observationSummary
  }
}
"""


def query_key(client: QueryClient, host: str, center_id: str, start_date: date, end_date: date) -> CacheKey:
    return client.build_key(
        NAMESPACE,
        {"host": host, "center": center_id, "startDate": start_date, "endDate": end_date},
    )


async def fetch_observation_list(
    fetcher: IFetcher, host: str, center_id: str, start_date: date, end_date: date
) -> Any:
    body = {
        "query": OBSERVATION_LIST_QUERY,
        "variables": {
            "center": center_id,
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
        },
    }
    return await fetcher.post(f"{host}/obs/v1/public/graphql", body, what="observations")


def observation_list_query(
    client: QueryClient, center_id: str, start_date: date, end_date: date
) -> Query[list[ObservationOverview]]:
    host = client.hosts.national_avalanche_center_host
    return client.query(
        query_key(client, host, center_id, start_date, end_date),
        functools.partial(fetch_observation_list, client.fetcher, host, center_id, start_date, end_date),
        observation_list_validator,
        tags={"center": center_id},
    )


async def prefetch_observation_list(
    client: QueryClient, center_id: str, start_date: date, end_date: date
) -> None:
    host = client.hosts.national_avalanche_center_host
    await client.prefetch(
        query_key(client, host, center_id, start_date, end_date),
        functools.partial(fetch_observation_list, client.fetcher, host, center_id, start_date, end_date),
        observation_list_validator,
        tags={"center": center_id},
    )
