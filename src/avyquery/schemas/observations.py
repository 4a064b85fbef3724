"""Public observation list schema."""

from datetime import datetime

from avyquery.schemas.base import Record, SchemaValidator, UtcTimestamp


class LocationPoint(Record):
    lat: float
    lng: float


class ObservationOverview(Record):
    id: str
    observerType: str
    name: str
    startDate: UtcTimestamp
    locationName: str
    locationPoint: LocationPoint
    observationSummary: str | None = None


class ObservationListData(Record):
    getObservationList: list[ObservationOverview]


class ObservationListResponse(Record):
    data: ObservationListData


def newest_first(observations: list[ObservationOverview]) -> list[ObservationOverview]:
    """Order observations by start date, most recent first."""
    return sorted(
        observations,
        key=lambda observation: datetime.fromisoformat(observation.startDate),
        reverse=True,
    )


observation_list_validator: SchemaValidator[list[ObservationOverview]] = SchemaValidator(
    ObservationListResponse,
    unwrap=lambda response: response.data.getObservationList,
)
