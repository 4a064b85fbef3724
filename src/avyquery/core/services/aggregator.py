"""Aggregation of several query results into one UI-facing state.

Screens usually depend on more than one query. ``aggregate`` folds their
results into a single state with a fixed precedence:

    ERROR > LOADING > NOT_FOUND > SUCCESS

Results that are the ignore sentinel are dropped first.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from avyquery.core.entities.query_result import NotFound, QueryResult
from avyquery.core.errors import AggregateError, QueryError
from avyquery.core.interfaces.error_reporter import IErrorReporter
from avyquery.core.services.query import Query


class AggregateStatus(Enum):
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not_found"
    SUCCESS = "success"


@dataclass(frozen=True)
class AggregateState:
    """Derived state of a set of queries.

    Attributes:
        status: The winning AggregateStatus.
        error: Every constituent error, when status is ERROR.
        not_found: Every NotFound payload, when status is NOT_FOUND.
        data: The data of every applicable result, when status is SUCCESS.
    """

    status: AggregateStatus
    error: AggregateError | None = None
    not_found: tuple[NotFound, ...] = ()
    data: tuple[Any, ...] = ()

    @property
    def what(self) -> str:
        """Name of the first missing subject, for a "no results" view."""
        if self.not_found and self.not_found[0].what:
            return self.not_found[0].what
        return NotFound().what

    @property
    def is_complete(self) -> bool:
        return self.status is AggregateStatus.SUCCESS


def aggregate(
    results: Iterable[QueryResult[Any]],
    reporter: IErrorReporter | None = None,
) -> AggregateState:
    """Fold query results into one state.

    Args:
        results: The results, in display order.
        reporter: When given, receives the AggregateError of an ERROR state.

    Returns:
        The AggregateState. An empty or all-ignored input is SUCCESS with
        no data.
    """
    applicable = [result for result in results if not result.is_ignored]

    errors: list[QueryError] = [
        result.error
        for result in applicable
        if result.is_error and result.error is not None
    ]
    if errors or any(result.is_error for result in applicable):
        error = AggregateError(errors)
        if reporter is not None:
            reporter.capture(error, {"aggregate": True, "errors": len(errors)})
        return AggregateState(status=AggregateStatus.ERROR, error=error)

    # A disabled or not yet started query has nothing to show either.
    if any(result.is_loading or result.is_idle for result in applicable):
        return AggregateState(status=AggregateStatus.LOADING)

    not_found = tuple(result.data for result in applicable if result.is_not_found)
    if not_found:
        return AggregateState(status=AggregateStatus.NOT_FOUND, not_found=not_found)  # type: ignore[arg-type]

    return AggregateState(
        status=AggregateStatus.SUCCESS,
        data=tuple(result.data for result in applicable),
    )


def is_incomplete(*results: QueryResult[Any]) -> bool:
    """Check whether any result still needs a status view instead of data.

    True if an applicable result is loading, idle, failed or not found.
    """
    return aggregate(results).status is not AggregateStatus.SUCCESS


def watch(
    queries: Sequence[Query[Any]],
    listener: Callable[[AggregateState], None],
    reporter: IErrorReporter | None = None,
) -> Callable[[], None]:
    """Re-aggregate whenever one of the queries changes.

    Args:
        queries: The queries to watch.
        listener: Called with the new AggregateState after every change.
        reporter: Passed on to ``aggregate``.

    Returns:
        A function that stops watching.
    """

    def on_change(_: QueryResult[Any]) -> None:
        listener(aggregate((query.result for query in queries), reporter))

    unsubscribers = [query.subscribe(on_change) for query in queries]

    def stop() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    return stop
