"""Query - observable fetch state for a single cache key."""

import asyncio
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Generic, TypeVar

from avyquery.core.entities.cache_entry import CacheEntry
from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.entities.query_result import QueryResult, QueryStatus
from avyquery.core.services.cache_store import CacheStore, Loader

T = TypeVar("T")


class Query(Generic[T]):
    """One consumer's view of a cache key.

    A query never owns data: it reads the shared entry for its key from the
    store and asks the store to fetch when the entry is missing or stale.
    Many Query objects may point at the same key; they share one entry and
    one in-flight fetch.

    Queries are normally built by ``QueryClient.query``.
    """

    def __init__(
        self,
        store: CacheStore,
        key: CacheKey,
        loader: Loader,
        *,
        stale_time: timedelta,
        cache_time: timedelta,
        enabled: bool = True,
        ignored: bool = False,
    ) -> None:
        """Initialize the query.

        Args:
            store: The session's cache store.
            key: The cache key this query reads.
            loader: Coroutine function that fetches and validates the record.
            stale_time: How long a success is served without revalidation.
            cache_time: How long the entry may stay unaccessed.
            enabled: Disabled queries never fetch and report IDLE.
            ignored: Ignored queries do not apply to their parameters; they
                never fetch and report the ignore sentinel.
        """
        self._store = store
        self._key = key
        self._loader = loader
        self._stale_time = stale_time
        self._cache_time = cache_time
        self._enabled = enabled
        self._ignored = ignored

    @property
    def key(self) -> CacheKey:
        return self._key

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_ignored(self) -> bool:
        return self._ignored

    @property
    def result(self) -> QueryResult[T]:
        """Current snapshot, derived from the shared entry for the key."""
        if self._ignored:
            return QueryResult.ignore()
        if not self._enabled:
            return QueryResult.idle()

        entry = self._store.peek(self._key)
        fetching = self._store.is_fetching(self._key)
        if entry is None:
            return QueryResult.loading() if fetching else QueryResult.idle()
        return self._snapshot(entry, fetching)

    def _snapshot(self, entry: CacheEntry, fetching: bool) -> QueryResult[T]:
        stale = entry.is_stale(self._store.now())
        if entry.status is QueryStatus.SUCCESS:
            return QueryResult(
                status=QueryStatus.SUCCESS,
                data=entry.value,
                is_fetching=fetching,
                is_stale=stale,
            )
        if entry.status is QueryStatus.ERROR:
            return QueryResult(
                status=QueryStatus.ERROR,
                data=entry.value if entry.has_value else None,
                error=entry.error,
                is_fetching=fetching,
                is_stale=stale,
            )
        return QueryResult(status=QueryStatus.LOADING, is_fetching=fetching)

    def observe(self) -> QueryResult[T]:
        """Read the key, starting a fetch if the entry is missing or stale.

        Returns at once. A stale success is returned as is while it is
        revalidated in the background. Must be called from within a running
        event loop.

        Returns:
            The snapshot right after the lookup.
        """
        if self._ignored or not self._enabled:
            return self.result

        entry = self._store.lookup(self._key, self._cache_time)
        if entry is None or entry.is_stale(self._store.now()):
            self._start()
        return self.result

    async def fetch(self) -> QueryResult[T]:
        """Read the key, waiting only if there is nothing to show yet.

        Returns:
            The stale or fresh success if one exists, otherwise the snapshot
            after the fetch settled.
        """
        result = self.observe()
        if result.is_loading:
            task = self._store.in_flight(self._key)
            if task is not None:
                await asyncio.shield(task)
        return self.result

    async def refetch(self) -> QueryResult[T]:
        """Fetch the key now, even if its data is fresh.

        Joins a fetch that is already in flight instead of starting another.

        Returns:
            The snapshot after the fetch settled.
        """
        if self._ignored or not self._enabled:
            return self.result

        self._store.lookup(self._key, self._cache_time)
        await asyncio.shield(self._start())
        return self.result

    def subscribe(self, listener: Callable[[QueryResult[T]], None]) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot whenever the key changes.

        Returns:
            A function that unsubscribes the listener.
        """

        def on_change(entry: CacheEntry | None) -> None:
            listener(self.result)

        return self._store.subscribe(self._key, on_change)

    def _start(self) -> "asyncio.Task[Any]":
        return self._store.fetch(
            self._key,
            self._loader,
            stale_time=self._stale_time,
            cache_time=self._cache_time,
        )

    def __repr__(self) -> str:
        return f"Query({self._key}, status={self.result.status.value})"
