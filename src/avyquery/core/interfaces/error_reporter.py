"""Error reporter interface."""

from collections.abc import Mapping
from typing import Any, Protocol


class IErrorReporter(Protocol):
    """Contract for the crash/telemetry side channel.

    Called once for every fetch that ends in an error and whenever an
    aggregate resolves to an error.
    """

    def capture(
        self,
        error: BaseException,
        tags: Mapping[str, Any] | None = None,
    ) -> None:
        """Report an error.

        Args:
            error: The error to report.
            tags: Extra searchable context, e.g. the URL or cache key.
        """
        ...
