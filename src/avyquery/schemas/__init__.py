"""Pydantic schemas and validators for remote payloads."""

from avyquery.schemas.base import Record, SchemaValidator, TruthyBool, UtcTimestamp
from avyquery.schemas.nwac_weather import (
    NWACWeatherForecast,
    TimeOfDay,
    format_time_of_day,
    nwac_weather_forecast_validator,
)
from avyquery.schemas.observations import (
    ObservationOverview,
    newest_first,
    observation_list_validator,
)
from avyquery.schemas.snowbound import (
    StationResponse,
    StationStatus,
    StationTimeSeries,
    station_active,
    station_list_validator,
    station_timeseries_validator,
)
from avyquery.schemas.weather import Weather, weather_validator

__all__ = [
    "Record",
    "SchemaValidator",
    "TruthyBool",
    "UtcTimestamp",
    # NWAC mountain weather
    "NWACWeatherForecast",
    "TimeOfDay",
    "format_time_of_day",
    "nwac_weather_forecast_validator",
    # Weather products
    "Weather",
    "weather_validator",
    # Snowbound stations
    "StationResponse",
    "StationStatus",
    "StationTimeSeries",
    "station_active",
    "station_list_validator",
    "station_timeseries_validator",
    # Observations
    "ObservationOverview",
    "newest_first",
    "observation_list_validator",
]
