"""Queries for the remote records avyquery knows about."""

from avyquery.queries.nwac_weather import (
    nwac_weather_forecast_query,
    prefetch_nwac_weather_forecast,
)
from avyquery.queries.observations import observation_list_query, prefetch_observation_list
from avyquery.queries.station_timeseries import station_timeseries_query
from avyquery.queries.weather_forecast import prefetch_weather_forecast, weather_forecast_query

__all__ = [
    "nwac_weather_forecast_query",
    "prefetch_nwac_weather_forecast",
    "weather_forecast_query",
    "prefetch_weather_forecast",
    "station_timeseries_query",
    "observation_list_query",
    "prefetch_observation_list",
]
