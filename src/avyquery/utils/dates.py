"""Date helpers shared by schemas and queries."""

from datetime import datetime, timezone
from typing import Literal, Union

RequestedTime = Union[datetime, Literal["latest"]]


def normalize_utc_timestamp(value: str) -> str:
    """Rewrite a timestamp so that it carries an explicit zone offset.

    Services that store times in UTC send ``YYYY-MM-DD HH:MM:SS`` with no
    offset. Such strings are rewritten to ISO 8601 with ``+00:00``; strings
    that already carry an offset only get the ``T`` separator.

    Args:
        value: The raw timestamp string.

    Returns:
        The normalized timestamp string.

    Raises:
        ValueError: If the value is not a date-time.

    Example:
        >>> normalize_utc_timestamp("2024-01-05 10:00:00")
        '2024-01-05T10:00:00+00:00'
    """
    candidate = value.strip().replace(" ", "T", 1)
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    if "T" not in candidate:
        raise ValueError(f"not a date-time: {value!r}")
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as e:
        raise ValueError(f"not a date-time: {value!r}") from e
    if parsed.tzinfo is None:
        return candidate + "+00:00"
    return candidate


def requested_time_to_utc(requested_time: RequestedTime, now: datetime | None = None) -> datetime:
    """Resolve a requested time to an aware UTC datetime.

    ``"latest"`` means now. Naive datetimes are taken to be UTC.
    """
    if requested_time == "latest":
        return now or datetime.now(timezone.utc)
    if requested_time.tzinfo is None:
        return requested_time.replace(tzinfo=timezone.utc)
    return requested_time.astimezone(timezone.utc)


def to_atom(value: datetime) -> str:
    """Format a datetime in the ATOM format, e.g. ``2024-01-05T10:00:00+00:00``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


def nominal_nwac_weather_forecast_date(requested_time: datetime) -> str:
    """Return the forecast day a requested time belongs to.

    NWAC publishes one mountain weather forecast per day, so every time on
    the same UTC day shares a cache key.
    """
    return requested_time.astimezone(timezone.utc).date().isoformat()
