"""Validator interface."""

from typing import Any, Protocol, TypeVar

from avyquery.core.entities.outcome import Invalid, Valid

T_co = TypeVar("T_co", covariant=True)


class IValidator(Protocol[T_co]):
    """Contract for turning raw payloads into typed records.

    Validation is all-or-nothing: either the whole record validates, or the
    first offending field is reported.
    """

    def validate(self, raw: Any) -> Valid[T_co] | Invalid:  # type: ignore[misc]
        """Validate and normalize a raw payload.

        Args:
            raw: The decoded, untrusted payload.

        Returns:
            Valid with the typed record, or Invalid with a ValidationError.
        """
        ...
