"""NWAC mountain weather forecast schema."""

from enum import Enum

from avyquery.schemas.base import Record, SchemaValidator, TruthyBool, UtcTimestamp


class TimeOfDay(str, Enum):
    """Period of a day a weather forecast row describes."""

    NOT_SPECIFIED = "0-notspec"
    MORNING = "1-morning"
    MIDDAY = "1a-midday"
    AFTERNOON = "2-afternoon"
    EVENING = "3-evening"
    NIGHT = "4-night"


_TIME_OF_DAY_LABELS = {
    TimeOfDay.NOT_SPECIFIED: "",
    TimeOfDay.MORNING: "Morning",
    TimeOfDay.MIDDAY: "Mid-day",
    TimeOfDay.AFTERNOON: "Afternoon",
    TimeOfDay.EVENING: "Evening",
    TimeOfDay.NIGHT: "Night",
}


def format_time_of_day(value: TimeOfDay) -> str:
    """Return the display label of a time of day, e.g. ``"Mid-day"``."""
    return _TIME_OF_DAY_LABELS[TimeOfDay(value)]


class TemperatureRange(Record):
    min: float
    max: float


class Forecaster(Record):
    first_name: str
    last_name: str


class MountainWeatherForecast(Record):
    id: float
    creation_date: UtcTimestamp  # sent as YYYY-MM-DD HH:MM:SS in UTC
    publish_date: UtcTimestamp  # sent as YYYY-MM-DD HH:MM:SS in UTC
    day1_date: str  # YYYY-MM-DD
    special_header_notes: str
    synopsis_day1_day2: str
    extended_synopsis: str
    afternoon: TruthyBool


class Precipitation(Record):
    value: str


class PrecipitationByLocation(Record):
    name: str
    order: float
    precipitation: list[Precipitation]


class SnowLevel(Record):
    elevation: float


class RidgelineWind(Record):
    direction: str | None
    speed: str | None


class WeatherForecastPeriod(Record):
    date: str  # YYYY-MM-DD
    time_of_day: TimeOfDay
    description: str


class NWACWeatherForecast(Record):
    """A regional mountain weather forecast as published by NWAC."""

    five_thousand_foot_temperatures: list[TemperatureRange]
    forecaster: Forecaster
    mountain_weather_forecast: MountainWeatherForecast
    periods: list[str]
    sub_periods: list[str]
    precipitation_by_location: list[PrecipitationByLocation]
    snow_levels: list[SnowLevel]
    ridgeline_winds: list[RidgelineWind]
    weather_forecasts: list[WeatherForecastPeriod]


class Meta(Record):
    limit: float | None = None
    next: str | None = None
    offset: float | None = None
    previous: str | None = None
    total_count: float | None = None


class NWACWeatherForecastEnvelope(Record):
    meta: Meta
    objects: NWACWeatherForecast


nwac_weather_forecast_validator: SchemaValidator[NWACWeatherForecast] = SchemaValidator(
    NWACWeatherForecastEnvelope,
    unwrap=lambda envelope: envelope.objects,
)
