"""Error reporter implementations."""

from avyquery.infrastructure.reporters.logging import LoggingErrorReporter

__all__ = ["LoggingErrorReporter"]
