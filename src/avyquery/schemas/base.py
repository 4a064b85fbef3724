"""Shared pydantic building blocks for payload schemas."""

from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from avyquery.core.entities.outcome import Invalid, Valid
from avyquery.core.errors import ValidationError
from avyquery.utils.dates import normalize_utc_timestamp

T = TypeVar("T")

# A UTC timestamp string, always carrying an explicit offset after validation.
UtcTimestamp = Annotated[str, AfterValidator(normalize_utc_timestamp)]

# Boolean coerced by truthiness, the way loosely typed producers send flags.
TruthyBool = Annotated[bool, BeforeValidator(bool)]


class Record(BaseModel):
    """Base class for every validated payload record.

    Unknown fields are dropped; validated records are immutable.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)


class SchemaValidator(Generic[T]):
    """Validates raw payloads against a pydantic type.

    Args:
        schema: A pydantic model or any type pydantic can validate.
        unwrap: Optional function picking the record out of a validated
            envelope, e.g. ``lambda envelope: envelope.objects``.

    Example:
        validator = SchemaValidator(Weather)
        outcome = validator.validate(payload)
        if isinstance(outcome, Valid):
            print(outcome.value.published_time)
    """

    def __init__(self, schema: Any, unwrap: Any = None) -> None:
        self._adapter: TypeAdapter[Any] = TypeAdapter(schema)
        self._unwrap = unwrap

    def validate(self, raw: Any) -> Valid[T] | Invalid:
        """Validate and normalize a raw payload.

        Args:
            raw: The decoded, untrusted payload.

        Returns:
            Valid with the typed record, or Invalid naming the first
            offending field.
        """
        try:
            value = self._adapter.validate_python(raw)
        except PydanticValidationError as e:
            return Invalid(ValidationError.from_pydantic(e))
        if self._unwrap is not None:
            value = self._unwrap(value)
        return Valid(value)
