"""Error taxonomy for avyquery.

Every failure a query can end in is a ``QueryError``. Valid absence of data is
not an error; see ``avyquery.core.entities.NotFound``.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError


class QueryError(Exception):
    """Base class for errors that terminate a query."""

    pass


class TransportError(QueryError):
    """Raised when the remote service could not be reached or answered badly.

    Attributes:
        kind: One of ``"http"``, ``"timeout"``, ``"network"`` or ``"decode"``.
        url: The requested URL, when known.
        status_code: The HTTP status code for ``"http"`` failures.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str = "network",
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: Exception) -> "TransportError":
        """Classify an arbitrary fetch failure as a transport error.

        Args:
            exc: The exception raised while fetching.

        Returns:
            ``exc`` itself if it already is a TransportError, otherwise a new
            TransportError chained to it.
        """
        if isinstance(exc, TransportError):
            return exc
        error = cls(f"{type(exc).__name__}: {exc}")
        error.__cause__ = exc
        return error


class ValidationError(QueryError):
    """Raised when a payload does not match the expected schema.

    Only the first offending field is reported.

    Attributes:
        path: Dot-joined path to the field, e.g. ``"objects.periods.0"``.
        expected: What the schema wanted at that path.
        actual: A short description of what was found instead.
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(f"{path or '<root>'}: expected {expected}, got {actual}")

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Build from the first error pydantic reported."""
        first = exc.errors(include_url=False)[0]
        path = ".".join(str(part) for part in first["loc"])
        if first["type"] == "missing":
            actual = "nothing"
        else:
            actual = describe_value(first.get("input"))
        return cls(path=path, expected=first["msg"], actual=actual)


class AggregateError(QueryError):
    """Every error behind an aggregate ``Error`` state."""

    def __init__(self, errors: Iterable[QueryError]) -> None:
        self.errors: tuple[QueryError, ...] = tuple(errors)
        summary = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} queries failed: {summary}")


def describe_value(value: Any) -> str:
    """Describe a raw value by its JSON-ish type name."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean {value!r}"
    if isinstance(value, (int, float)):
        return f"number {value!r}"
    if isinstance(value, str):
        shown = value if len(value) <= 40 else value[:37] + "..."
        return f"string {shown!r}"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
