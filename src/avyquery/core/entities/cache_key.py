"""Cache key value object."""

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheKey:
    """Immutable, structural cache key.

    A key is a namespace plus the frozen query parameters, sorted by name.
    Two keys built from equal parameters compare and hash equal no matter
    how the parameter mappings were built.
    """

    namespace: str
    params: tuple[tuple[str, Hashable], ...] = ()

    @property
    def parts(self) -> tuple[Hashable, ...]:
        """The ordered tuple ``(namespace, parameter values...)``."""
        return (self.namespace, *(value for _, value in self.params))

    def __str__(self) -> str:
        """Return a readable form for logs, e.g. ``weather-forecast[forecast=1]``."""
        if not self.params:
            return self.namespace
        inner = ",".join(f"{name}={value}" for name, value in self.params)
        return f"{self.namespace}[{inner}]"

    @classmethod
    def from_components(
        cls,
        namespace: str,
        params: Mapping[str, Any] | None = None,
        freeze_func: Callable[[Any], Hashable] | None = None,
    ) -> "CacheKey":
        """Create a CacheKey from raw query parameters.

        Args:
            namespace: The kind of record the key addresses.
            params: Query parameters; nested mappings and lists are allowed.
            freeze_func: Optional custom function making values hashable.

        Returns:
            A new CacheKey instance.
        """
        from avyquery.utils.hashing import freeze_value

        freezer = freeze_func or freeze_value
        frozen = tuple(
            sorted((str(name), freezer(value)) for name, value in (params or {}).items())
        )
        return cls(namespace=namespace, params=frozen)
