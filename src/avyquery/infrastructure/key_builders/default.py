"""Default key builder implementation."""

from collections.abc import Mapping
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.utils.hashing import freeze_value


class DefaultKeyBuilder:
    """Default key builder producing structural keys.

    Parameter values are frozen into hashable tuples, so equal parameters
    give equal keys whatever the mapping order or object identity.
    """

    def __init__(self, drop_none: bool = False) -> None:
        """Initialize the key builder.

        Args:
            drop_none: Whether to leave parameters whose value is None out of
                the key.
        """
        self._drop_none = drop_none

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
        if params and self._drop_none:
            params = {name: value for name, value in params.items() if value is not None}
        return CacheKey.from_components(namespace, params, freeze_func=freeze_value)
