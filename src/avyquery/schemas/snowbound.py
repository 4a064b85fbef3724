"""Station and time-series schemas of the Snowbound weather station API.

Field names mirror the wire format exactly, including the upper-case names
used inside time-series responses.
"""

from enum import Enum
from typing import Any

from avyquery.schemas.base import Record, SchemaValidator


class SourceIdentifier(str, Enum):
    NWAC = "nwac"


class PlotType(str, Enum):
    DEFAULT = "default"


class StationStatus(str, Enum):
    ACTIVE_LOWER = "active"
    ACTIVE = "ACTIVE"
    INACTIVE_LOWER = "inactive"
    INACTIVE = "INACTIVE"


def station_active(status: StationStatus) -> bool:
    """Check whether a station reports as active, in either spelling."""
    return status in (StationStatus.ACTIVE, StationStatus.ACTIVE_LOWER)


class NWACSummaryKey(str, Enum):
    """NWAC-specific keys of the time-series ``SUMMARY`` mapping."""

    DATA_PARSING_TIME = "NWAC_DATA_PARSING_TIME"
    DATA_QUERY_TIME = "NWAC_DATA_QUERY_TIME"
    METADATA_RESPONSE_TIME = "NWAC_METADATA_RESPONSE_TIME"
    NUMBER_OF_OBJECTS = "NWAC_NUMBER_OF_OBJECTS"
    TOTAL_DATA_TIME = "NWAC_TOTAL_DATA_TIME"


class VariableMetadata(Record):
    id: int
    long_name: str
    rounding: int
    tab: str
    source: str
    units: str
    variable: str


class StationMessage(Record):
    datalogger_id: int
    date: str  # YYYY-MM-DD
    node: str


class SnowObsMetadata(Record):
    id: int
    name: str
    plot_type: PlotType


class StationStyle(Record):
    client_id: int
    fill_color: str  # hex color code
    id: int
    name: str
    stroke_color: str  # hex color code
    symbol: str


class StationMetadataForTimeSeries(Record):
    CLIENT_ID: int
    CUSTOM_ATTRIBUTES: Any = None
    ELEVATION: float  # feet above sea level
    ID: int
    LOCATION_STYLE_ID: int
    LATITUDE: float
    LONGITUDE: float
    MESSAGES: list[StationMessage]
    MNET_ID: Any = None
    OBSERVATIONS: dict[str, list[Any]]
    PLOT_TYPE: PlotType
    SNOWOBS: SnowObsMetadata
    NAME: str
    SOURCE: str
    SOURCE_ID: Any = None
    STATE: str  # two-letter state code
    STATUS: StationStatus
    STID: int
    STYLE: StationStyle
    TIMEZONE: str  # three-letter timezone code


class StationTimeSeries(Record):
    SUMMARY: dict[str, Any]
    UNITS: dict[str, dict[str, str]]
    VARIABLES: dict[str, dict[str, VariableMetadata]]
    STATION: list[StationMetadataForTimeSeries]


class TimeSeriesResponse(Record):
    msg: str
    status: str
    station_timeseries: StationTimeSeries


class StationMetadata(Record):
    client_id: int
    custom_attributes: Any = None
    elevation: float
    id: int
    location_style_id: int
    latitude: float
    longitude: float
    messages: list[StationMessage]
    mnet_id: Any = None
    plot_type: PlotType
    snowobs: SnowObsMetadata
    name: str
    source: str
    source_id: Any = None
    state: str
    status: StationStatus
    stid: int
    style: StationStyle
    timezone: str


class StationResponse(Record):
    status: str
    total: int
    pages: int
    current_page: int  # 1-indexed
    results: list[StationMetadata]


station_timeseries_validator: SchemaValidator[StationTimeSeries] = SchemaValidator(
    TimeSeriesResponse,
    unwrap=lambda response: response.station_timeseries,
)

station_list_validator: SchemaValidator[StationResponse] = SchemaValidator(StationResponse)
