"""Core interfaces (Protocol classes) for avyquery."""

from avyquery.core.interfaces.error_reporter import IErrorReporter
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.interfaces.key_builder import IKeyBuilder
from avyquery.core.interfaces.validator import IValidator

__all__ = [
    "IErrorReporter",
    "IFetcher",
    "IKeyBuilder",
    "IValidator",
]
