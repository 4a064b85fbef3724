"""Query client - main entry point composing store, fetcher and validators."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import timedelta
from typing import Any, TypeVar

from avyquery.core.entities.cache_config import CacheConfig, ClientConfig, check_windows
from avyquery.core.entities.cache_key import CacheKey
from avyquery.core.entities.outcome import Failed, FetchOutcome, Invalid, Valid
from avyquery.core.entities.query_result import is_not_found
from avyquery.core.errors import TransportError
from avyquery.core.interfaces.error_reporter import IErrorReporter
from avyquery.core.interfaces.fetcher import IFetcher
from avyquery.core.interfaces.key_builder import IKeyBuilder
from avyquery.core.interfaces.validator import IValidator
from avyquery.core.services.cache_store import CacheStore, Loader
from avyquery.core.services.query import Query

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchFunc = Callable[[], Awaitable[Any]]


class QueryClient:
    """Session object that builds queries and prefetches records.

    Composes the cache store (the session's cache context), the key builder,
    the fetcher, and the error reporter. Create one per session and close it
    at teardown:

        async with QueryClient(fetcher=HttpxFetcher()) as client:
            query = nwac_weather_forecast_query(client, "NWAC", 1128, "latest")
            result = await query.fetch()
    """

    def __init__(
        self,
        fetcher: IFetcher,
        store: CacheStore | None = None,
        key_builder: IKeyBuilder | None = None,
        reporter: IErrorReporter | None = None,
        config: CacheConfig | None = None,
        hosts: ClientConfig | None = None,
    ) -> None:
        """Initialize the query client.

        Args:
            fetcher: Performs the network calls.
            store: The cache store. A new one is created from ``config`` if
                not provided.
            key_builder: Builds cache keys. Defaults to DefaultKeyBuilder.
            reporter: Receives errors. Defaults to LoggingErrorReporter.
            config: Cache configuration, used when no store is given.
            hosts: Remote service hosts. Uses defaults if not provided.
        """
        from avyquery.infrastructure.key_builders.default import DefaultKeyBuilder
        from avyquery.infrastructure.reporters.logging import LoggingErrorReporter

        self._fetcher = fetcher
        self._store = store if store is not None else CacheStore(config=config)
        self._key_builder = key_builder if key_builder is not None else DefaultKeyBuilder()
        self._reporter = reporter if reporter is not None else LoggingErrorReporter()
        self._hosts = hosts or ClientConfig()

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def fetcher(self) -> IFetcher:
        return self._fetcher

    @property
    def reporter(self) -> IErrorReporter:
        return self._reporter

    @property
    def hosts(self) -> ClientConfig:
        return self._hosts

    @property
    def config(self) -> CacheConfig:
        return self._store.config

    def build_key(self, namespace: str, params: Mapping[str, Any] | None = None) -> CacheKey:
        """Build the cache key for a query.

        Args:
            namespace: The kind of record being queried.
            params: The parameters that select the record.

        Returns:
            The structural cache key.
        """
        key = self._key_builder.build(namespace, params)
        logger.debug("initiating query %s", key)
        return key

    def query(
        self,
        key: CacheKey,
        fetch: FetchFunc,
        validator: IValidator[T],
        *,
        stale_time: timedelta | None = None,
        cache_time: timedelta | None = None,
        enabled: bool = True,
        provider: str | None = None,
        scope: str | None = None,
        tags: Mapping[str, Any] | None = None,
    ) -> Query[T]:
        """Create a query for a key.

        Args:
            key: The cache key, usually from ``build_key``.
            fetch: Coroutine function returning the raw payload.
            validator: Turns the raw payload into the typed record.
            stale_time: Overrides the configured stale time.
            cache_time: Overrides the configured cache time.
            enabled: Disabled queries never fetch and report IDLE.
            provider: The provider the query is invoked for.
            scope: The only provider this query applies to. When set and
                different from ``provider``, the query is the ignore sentinel.
            tags: Extra context attached to reported errors.

        Returns:
            A Query bound to this client's store.
        """
        stale_time, cache_time = self._windows(stale_time, cache_time)
        ignored = scope is not None and provider != scope
        if ignored:
            logger.debug("ignoring query %s for provider %s", key, provider)

        return Query(
            self._store,
            key,
            self._loader(key, fetch, validator, tags),
            stale_time=stale_time,
            cache_time=cache_time,
            enabled=enabled,
            ignored=ignored,
        )

    async def prefetch(
        self,
        key: CacheKey,
        fetch: FetchFunc,
        validator: IValidator[Any],
        *,
        stale_time: timedelta | None = None,
        cache_time: timedelta | None = None,
        tags: Mapping[str, Any] | None = None,
    ) -> None:
        """Warm the cache for a key.

        Does nothing while the key holds fresh data. Otherwise fetches, or
        joins the fetch already in flight, and waits for it. Failures are
        recorded in the entry and reported, never raised.

        Args:
            key: The cache key, usually from ``build_key``.
            fetch: Coroutine function returning the raw payload.
            validator: Turns the raw payload into the typed record.
            stale_time: Overrides the configured stale time.
            cache_time: Overrides the configured cache time.
            tags: Extra context attached to reported errors.
        """
        stale_time, cache_time = self._windows(stale_time, cache_time)
        entry = self._store.lookup(key, cache_time)
        if entry is not None and not entry.is_stale(self._store.now()):
            logger.debug("prefetch of %s skipped, data is fresh", key)
            return

        started = time.monotonic()
        logger.debug("prefetching %s", key)
        task = self._store.fetch(
            key,
            self._loader(key, fetch, validator, tags),
            stale_time=stale_time,
            cache_time=cache_time,
        )
        await asyncio.shield(task)
        logger.debug("finished prefetching %s in %.3fs", key, time.monotonic() - started)

    def _windows(
        self, stale_time: timedelta | None, cache_time: timedelta | None
    ) -> tuple[timedelta, timedelta]:
        config = self._store.config
        stale = stale_time if stale_time is not None else config.stale_time
        cache = cache_time if cache_time is not None else config.cache_time
        check_windows(stale, cache)
        return stale, cache

    def _loader(
        self,
        key: CacheKey,
        fetch: FetchFunc,
        validator: IValidator[Any],
        tags: Mapping[str, Any] | None,
    ) -> Loader:
        """Wrap a fetch into the task body the store runs for a key.

        The task issues the request, awaits the response, validates it and
        hands the outcome back to the store to commit. Failures are reported
        here, once per fetch.
        """
        report_tags = {"query": str(key), **(tags or {})}

        async def load() -> FetchOutcome[Any]:
            started = time.monotonic()
            logger.debug("fetching %s", key)
            try:
                raw = await fetch()
            except Exception as e:
                error = TransportError.from_exception(e)
                logger.warning("failed to fetch %s: %s", key, error)
                self._reporter.capture(error, report_tags)
                return Failed(error)

            outcome: FetchOutcome[Any]
            if is_not_found(raw):
                outcome = Valid(raw)
            else:
                outcome = validator.validate(raw)

            if isinstance(outcome, Invalid):
                logger.warning("failed to parse %s: %s", key, outcome.error)
                self._reporter.capture(
                    outcome.error, {**report_tags, "validation_error": True}
                )
            logger.debug(
                "finished fetching %s in %.3fs", key, time.monotonic() - started
            )
            return outcome

        return load

    async def close(self) -> None:
        """Tear down the session's cache store."""
        await self._store.close()

    async def __aenter__(self) -> "QueryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
