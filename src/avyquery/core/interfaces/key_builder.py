"""Key builder interface."""

from collections.abc import Mapping
from typing import Any, Protocol

from avyquery.core.entities.cache_key import CacheKey


class IKeyBuilder(Protocol):
    """Contract for building cache keys from query parameters.

    Key builders must be pure: equal parameters always give equal keys,
    regardless of object identity or mapping order.
    """

    def build(
        self,
        namespace: str,
        params: Mapping[str, Any] | None = None,
    ) -> CacheKey:
        """Build the cache key for a query.

        Args:
            namespace: The kind of record being queried.
            params: The parameters that select the record.

        Returns:
            A structural CacheKey.
        """
        ...
