"""Outcomes of a single fetch attempt.

A fetch ends in exactly one of three ways. ``Valid`` and ``Invalid`` are
also what a validator returns.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from avyquery.core.errors import TransportError, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """The payload validated; ``value`` is the typed, normalized record."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """The payload arrived but did not match its schema."""

    error: ValidationError


@dataclass(frozen=True)
class Failed:
    """The payload never arrived."""

    error: TransportError


FetchOutcome = Union[Valid[T], Invalid, Failed]
