"""Error reporter writing to the standard logging system."""

import logging
from collections.abc import Mapping
from typing import Any


class LoggingErrorReporter:
    """Reports errors as log records.

    The default reporter when no crash-reporting service is wired in. Each
    captured error becomes one ERROR record on the ``avyquery.reporting``
    logger with the tags attached as ``extra``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("avyquery.reporting")

    def capture(
        self,
        error: BaseException,
        tags: Mapping[str, Any] | None = None,
    ) -> None:
        """Report an error.

        Args:
            error: The error to report.
            tags: Extra searchable context.
        """
        self._logger.error(
            "%s: %s",
            type(error).__name__,
            error,
            extra={"tags": dict(tags or {})},
        )
