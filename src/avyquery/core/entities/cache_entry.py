"""Cache entry entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.entities.query_result import QueryStatus
from avyquery.core.errors import QueryError


@dataclass
class CacheEntry:
    """Mutable cache entry.

    Created the first time a key is fetched and updated in place by every
    later fetch of that key. Holds the last good value next to the outcome
    of the most recent attempt.

    Invariant: ``stale_at <= expires_at`` whenever ``stale_at`` is set.
    """

    key: CacheKey
    expires_at: datetime
    cache_time: timedelta
    status: QueryStatus = QueryStatus.LOADING
    value: Any = None
    has_value: bool = False
    error: QueryError | None = None
    fetched_at: datetime | None = None
    stale_at: datetime | None = None

    def is_stale(self, now: datetime) -> bool:
        """Check if the entry should be revalidated.

        Entries that never settled are always stale.
        """
        if self.stale_at is None:
            return True
        return now >= self.stale_at

    def is_expired(self, now: datetime) -> bool:
        """Check if the entry is past its eviction time."""
        return now >= self.expires_at

    def touch(self, now: datetime, cache_time: timedelta | None = None) -> None:
        """Record an access, pushing eviction back by ``cache_time``.

        Args:
            now: The access time.
            cache_time: The accessing query's cache time. The longest cache
                time seen for the key wins.
        """
        if cache_time is not None and cache_time > self.cache_time:
            self.cache_time = cache_time
        self.expires_at = max(self.expires_at, now + self.cache_time)

    @classmethod
    def create(cls, key: CacheKey, now: datetime, cache_time: timedelta) -> "CacheEntry":
        """Factory method for an entry whose first fetch is starting.

        Args:
            key: The cache key.
            now: Creation time.
            cache_time: How long the entry may stay unaccessed.

        Returns:
            A new CacheEntry in LOADING status.
        """
        return cls(key=key, expires_at=now + cache_time, cache_time=cache_time)
