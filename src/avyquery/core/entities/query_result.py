"""Query status entities.

``QueryResult`` is the snapshot a query exposes to its consumers: a status,
the last good data and the error that ended the last attempt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from avyquery.core.errors import QueryError

T = TypeVar("T")


class QueryStatus(Enum):
    """Lifecycle status of a query.

    IDLE: Disabled, or never invoked.
    LOADING: Fetching with no previous success to show.
    SUCCESS: Data (possibly a NotFound marker) is available.
    ERROR: The last attempt failed.
    """

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class NotFound:
    """Success payload meaning the requested resource does not exist.

    Attributes:
        what: Human readable name of the missing subject.
    """

    what: str = "requested resource"


def is_not_found(data: Any) -> bool:
    """Check whether a payload is the NotFound marker."""
    return isinstance(data, NotFound)


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Snapshot of one query.

    Attributes:
        status: The current QueryStatus.
        data: The last successfully fetched value, if any.
        error: The error that ended the last attempt, if it failed.
        is_ignored: True for the sentinel of a query that does not apply to
            its parameters; such results carry nothing and are skipped by
            the aggregator.
        is_fetching: True while a fetch for the key is in flight.
        is_stale: True when the data is past its stale time.
    """

    status: QueryStatus
    data: T | None = None
    error: QueryError | None = None
    is_ignored: bool = False
    is_fetching: bool = False
    is_stale: bool = False

    @property
    def is_idle(self) -> bool:
        return self.status is QueryStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_not_found(self) -> bool:
        """Check if the query succeeded with the NotFound marker."""
        return self.is_success and is_not_found(self.data)

    @classmethod
    def idle(cls) -> "QueryResult[Any]":
        return cls(status=QueryStatus.IDLE)

    @classmethod
    def loading(cls) -> "QueryResult[Any]":
        return cls(status=QueryStatus.LOADING, is_fetching=True)

    @classmethod
    def ignore(cls) -> "QueryResult[Any]":
        """Create the sentinel for a query that does not apply."""
        return cls(status=QueryStatus.SUCCESS, is_ignored=True)
