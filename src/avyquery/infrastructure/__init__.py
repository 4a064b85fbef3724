"""Infrastructure layer implementations for avyquery."""

from avyquery.infrastructure.fetchers import HttpxFetcher
from avyquery.infrastructure.key_builders import DefaultKeyBuilder
from avyquery.infrastructure.reporters import LoggingErrorReporter

__all__ = [
    "HttpxFetcher",
    "DefaultKeyBuilder",
    "LoggingErrorReporter",
]
