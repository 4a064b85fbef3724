"""Weather product schema of the National Avalanche Center API."""

from typing import Any, Literal

from pydantic import Field

from avyquery.schemas.base import Record, SchemaValidator, UtcTimestamp


class ForecastZone(Record):
    id: int
    name: str
    url: str | None = None
    state: str | None = None
    zone_id: str | None = None


class MediaItem(Record):
    id: int | None = None
    type: str
    caption: str | None = None
    url: dict[str, str] | None = None


class Weather(Record):
    """A published weather product.

    ``weather_data`` is free-form and differs between centers.
    """

    id: int
    product_type: Literal["weather"]
    status: str
    author: str | None
    published_time: UtcTimestamp
    expires_time: UtcTimestamp | None
    created_at: UtcTimestamp
    updated_at: UtcTimestamp
    avalanche_center: dict[str, Any] | None = None
    announcement: str | None = None
    weather_discussion: str | None = None
    weather_data: Any = None
    media: list[MediaItem] = Field(default_factory=list)
    forecast_zone: list[ForecastZone] = Field(default_factory=list)


weather_validator: SchemaValidator[Weather] = SchemaValidator(Weather)
