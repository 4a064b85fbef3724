"""HTTP fetcher implementation on top of httpx."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from avyquery.core.entities.query_result import NotFound
from avyquery.core.errors import TransportError

logger = logging.getLogger(__name__)


class HttpxFetcher:
    """Fetcher performing requests with an ``httpx.AsyncClient``.

    Classifies every failure as a TransportError:

    - timeouts become ``kind="timeout"``,
    - connection and protocol failures become ``kind="network"``,
    - error status codes become ``kind="http"``,
    - bodies that are not JSON become ``kind="decode"``.

    A 404 response is not a failure: it returns the NotFound marker naming
    the requested resource.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Client to send requests with. A new client owned by the
                fetcher is created if not provided.
            timeout: Timeout in seconds for a client created here.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

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
            what: Human readable name of the resource.

        Returns:
            The decoded JSON body, or NotFound for a 404.

        Raises:
            TransportError: If the request failed.
        """
        return await self._request("GET", url, what, params=params)

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
            what: Human readable name of the resource.

        Returns:
            The decoded JSON body, or NotFound for a 404.

        Raises:
            TransportError: If the request failed.
        """
        return await self._request("POST", url, what, json=json)

    async def _request(self, method: str, url: str, what: str, **kwargs: Any) -> Any:
        logger.debug("fetching %s from %s", what, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("timed out fetching %s from %s", what, url)
            raise TransportError(
                f"timed out fetching {what}", kind="timeout", url=url
            ) from e
        except httpx.HTTPError as e:
            logger.warning("error fetching %s from %s: %s", what, url, e)
            raise TransportError(
                f"could not fetch {what}: {e}", kind="network", url=url
            ) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("%s not found at %s", what, url)
            return NotFound(what=what)
        if response.is_error:
            logger.warning(
                "error fetching %s from %s: HTTP %d", what, url, response.status_code
            )
            raise TransportError(
                f"could not fetch {what}: HTTP {response.status_code}",
                kind="http",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"could not decode {what}: {e}", kind="decode", url=url
            ) from e

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
