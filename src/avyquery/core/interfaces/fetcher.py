"""Fetcher interface."""

from collections.abc import Mapping
from typing import Any, Protocol


class IFetcher(Protocol):
    """Contract for performing raw network calls.

    Fetchers return decoded, unvalidated payloads. A fetcher may return the
    ``NotFound`` marker for resources the service reports as missing. Any
    exception a fetcher raises is treated as a transport failure.
    """

    async def get(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        what: str = "resource",
    ) -> Any:
        """Fetch a resource with GET.

        Args:
            url: Absolute URL of the resource.
            params: Query string parameters.
            what: Human readable name of the resource, for logs and NotFound.

        Returns:
            The decoded payload, or a NotFound marker.
        """
        ...

    async def post(
        self,
        url: str,
        json: Any = None,
        *,
        what: str = "resource",
    ) -> Any:
        """Fetch a resource with a JSON POST body.

        Args:
            url: Absolute URL of the resource.
            json: JSON-serializable request body.
            what: Human readable name of the resource, for logs and NotFound.

        Returns:
            The decoded payload, or a NotFound marker.
        """
        ...
