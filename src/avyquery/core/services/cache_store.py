"""Cache store - shared entries plus in-flight fetch de-duplication."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]

from avyquery.core.entities.cache_config import CacheConfig
from avyquery.core.entities.cache_entry import CacheEntry
from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.entities.outcome import FetchOutcome, Valid
from avyquery.core.entities.query_result import QueryStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Loader = Callable[[], Awaitable[FetchOutcome[Any]]]
Listener = Callable[[CacheEntry | None], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _entry_expiry(key: CacheKey, entry: CacheEntry, now: datetime) -> datetime:
    return entry.expires_at


class CacheStore:
    """In-memory store shared by every query of a session.

    Entries live in a cachetools TLRUCache whose per-item expiry is the
    entry's ``expires_at``, so an entry nobody accessed for its cache time
    is gone on the next lookup. Fetches run as asyncio tasks; there is at
    most one task per key, and every caller for that key joins it.

    The store is the session's cache context. Create one at startup and
    close it (or use ``async with``) at teardown.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the cache store.

        Args:
            config: Optional cache configuration. Uses defaults if not provided.
            clock: Returns the current aware datetime. Defaults to UTC now.
        """
        self._config = config or CacheConfig()
        self._clock = clock or utc_now
        self._entries: TLRUCache[CacheKey, CacheEntry] = TLRUCache(
            maxsize=self._config.max_size,
            ttu=_entry_expiry,
            timer=self._clock,
        )
        self._in_flight: dict[CacheKey, asyncio.Task[CacheEntry]] = {}
        self._listeners: dict[CacheKey, list[Listener]] = {}

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, total lookups and in-flight fetches.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
            "in_flight": len(self._in_flight),
        }

    def now(self) -> datetime:
        """Return the store's current time."""
        return self._clock()

    def peek(self, key: CacheKey) -> CacheEntry | None:
        """Return the live entry for a key without counting an access."""
        entry: CacheEntry | None = self._entries.get(key)
        return entry

    def lookup(
        self, key: CacheKey, cache_time: timedelta | None = None
    ) -> CacheEntry | None:
        """Return the live entry for a key and record the access.

        An access pushes the entry's eviction time back. Entries past their
        ``expires_at`` are misses.

        Args:
            key: The cache key.
            cache_time: The accessing query's cache time.

        Returns:
            The entry, or None on a miss.
        """
        entry = self.peek(key)
        if entry is None:
            self._misses += 1
            return None

        self._hits += 1
        entry.touch(self.now(), cache_time)
        self._entries[key] = entry
        return entry

    def is_fetching(self, key: CacheKey) -> bool:
        """Check whether a fetch for the key is in flight."""
        return key in self._in_flight

    def in_flight(self, key: CacheKey) -> "asyncio.Task[CacheEntry] | None":
        """Return the in-flight fetch task for a key, if any."""
        return self._in_flight.get(key)

    def fetch(
        self,
        key: CacheKey,
        loader: Loader,
        *,
        stale_time: timedelta | None = None,
        cache_time: timedelta | None = None,
    ) -> "asyncio.Task[CacheEntry]":
        """Start a fetch for a key, or join the one already running.

        Must be called from within a running event loop. The returned task
        resolves to the committed entry. Await it through ``asyncio.shield``
        so that cancelling one caller leaves the fetch running for the rest.

        Args:
            key: The cache key.
            loader: Coroutine function performing the fetch. Only called when
                no fetch for the key is in flight.
            stale_time: Freshness window for a successful result.
            cache_time: Eviction window for the entry.

        Returns:
            The in-flight task for the key.
        """
        task = self._in_flight.get(key)
        if task is not None:
            logger.debug("joining in-flight fetch for %s", key)
            return task

        stale_time = stale_time if stale_time is not None else self._config.stale_time
        cache_time = cache_time if cache_time is not None else self._config.cache_time

        now = self.now()
        entry = self.peek(key)
        if entry is None:
            entry = CacheEntry.create(key, now, cache_time)
        elif entry.status is QueryStatus.ERROR and not entry.has_value:
            entry.status = QueryStatus.LOADING
        entry.touch(now, cache_time)
        self._entries[key] = entry

        task = asyncio.ensure_future(self._run(key, loader, stale_time, cache_time))
        self._in_flight[key] = task
        self._notify(key, entry)
        return task

    async def _run(
        self,
        key: CacheKey,
        loader: Loader,
        stale_time: timedelta,
        cache_time: timedelta,
    ) -> CacheEntry:
        try:
            outcome = await loader()
            entry = self.commit(key, outcome, stale_time=stale_time, cache_time=cache_time)
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]
        self._notify(key, entry)
        return entry

    def commit(
        self,
        key: CacheKey,
        outcome: FetchOutcome[Any],
        *,
        stale_time: timedelta | None = None,
        cache_time: timedelta | None = None,
    ) -> CacheEntry:
        """Write the outcome of a fetch into the entry for a key.

        A valid outcome replaces the value and is fresh for ``stale_time``.
        A failure keeps the previous value, sets the error and is stale at
        once so that the next access retries.

        Args:
            key: The cache key.
            outcome: The fetch outcome.
            stale_time: Freshness window. Clamped to ``cache_time``.
            cache_time: Eviction window. The longest cache time seen for the
                key wins, and the eviction time never moves backwards.

        Returns:
            The updated entry.
        """
        stale_time = stale_time if stale_time is not None else self._config.stale_time
        cache_time = cache_time if cache_time is not None else self._config.cache_time

        now = self.now()
        entry = self.peek(key)
        if entry is None:
            entry = CacheEntry.create(key, now, cache_time)

        entry.fetched_at = now
        entry.touch(now, cache_time)
        if isinstance(outcome, Valid):
            entry.status = QueryStatus.SUCCESS
            entry.value = outcome.value
            entry.has_value = True
            entry.error = None
            entry.stale_at = now + min(stale_time, cache_time)
        else:
            entry.status = QueryStatus.ERROR
            entry.error = outcome.error
            entry.stale_at = now

        self._entries[key] = entry
        return entry

    def invalidate(self, key: CacheKey) -> bool:
        """Mark an entry stale so that its next access revalidates it.

        Returns:
            True if the key had a live entry, False otherwise.
        """
        entry = self.peek(key)
        if entry is None:
            return False
        now = self.now()
        if entry.stale_at is None or entry.stale_at > now:
            entry.stale_at = now
        self._notify(key, entry)
        return True

    def remove(self, key: CacheKey) -> bool:
        """Evict an entry. A fetch in flight for it may still commit.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        existed = self.peek(key) is not None
        self._entries.pop(key, None)
        if existed:
            self._notify(key, None)
        return existed

    def subscribe(self, key: CacheKey, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the entry whenever the key changes.

        Args:
            key: The cache key to watch.
            listener: Called with the entry, or None once it is removed.

        Returns:
            A function that unsubscribes the listener.
        """
        listeners = self._listeners.setdefault(key, [])
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(key, None)

        return unsubscribe

    def _notify(self, key: CacheKey, entry: CacheEntry | None) -> None:
        for listener in list(self._listeners.get(key, ())):
            listener(entry)

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    async def close(self) -> None:
        """Cancel in-flight fetches, drop all entries and listeners."""
        tasks = list(self._in_flight.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
        self._listeners.clear()
        self.clear()

    async def __aenter__(self) -> "CacheStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        """Return the number of live entries."""
        self._entries.expire()
        return len(self._entries)
