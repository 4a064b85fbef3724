"""Tests for Query and QueryClient orchestration."""

import asyncio
import functools
from datetime import timedelta
from typing import Any

import pytest

from avyquery import (
    CacheConfig,
    CacheStore,
    NotFound,
    Query,
    QueryClient,
    QueryStatus,
    SchemaValidator,
    TransportError,
    ValidationError,
)
from avyquery.schemas.base import Record
from tests.fakes import FakeClock, RecordingReporter, StubFetcher

URL = "https://api.example.test/v2/public/product/1"


class Product(Record):
    id: int
    name: str


def product_query(client: QueryClient, **kwargs: Any) -> Query[Product]:
    key = client.build_key("product", {"id": 1})
    return client.query(
        key,
        functools.partial(client.fetcher.get, URL, what="product"),
        SchemaValidator(Product),
        **kwargs,
    )


async def prefetch_product(client: QueryClient) -> None:
    await client.prefetch(
        client.build_key("product", {"id": 1}),
        functools.partial(client.fetcher.get, URL, what="product"),
        SchemaValidator(Product),
    )


class TestQueryFetch:
    """Tests for first fetches."""

    @pytest.mark.asyncio
    async def test_first_fetch(self, client: QueryClient, fetcher: StubFetcher) -> None:
        """Test a first fetch from loading to success."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)

        assert query.result.is_idle
        result = await query.fetch()

        assert result.status is QueryStatus.SUCCESS
        assert result.data == Product(id=1, name="first")
        assert not result.is_fetching
        assert not result.is_stale
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_observe_returns_loading(self, client: QueryClient, fetcher: StubFetcher) -> None:
        """Test that observe starts the fetch and returns at once."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)

        result = query.observe()

        assert result.is_loading
        assert result.is_fetching
        assert result.data is None
        await client.store.in_flight(query.key)
        assert query.result.is_success

    @pytest.mark.asyncio
    async def test_queries_for_equal_keys_share_data(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that two queries built from equal parameters share one entry."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}

        first = await product_query(client).fetch()
        second = await product_query(client).fetch()

        assert second.data is first.data
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_fetches_issue_one_request(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that N concurrent queries for one key make one request."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        fetcher.gate = asyncio.Event()
        queries = [product_query(client) for _ in range(5)]

        tasks = [asyncio.ensure_future(query.fetch()) for query in queries]
        await asyncio.sleep(0)
        fetcher.gate.set()
        results = await asyncio.gather(*tasks)

        assert len(fetcher.calls) == 1
        assert all(result.data == Product(id=1, name="first") for result in results)

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_fetch(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that the fetch outlives a caller that went away."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        fetcher.gate = asyncio.Event()
        query = product_query(client)

        caller = asyncio.ensure_future(query.fetch())
        await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        task = client.store.in_flight(query.key)
        assert task is not None
        fetcher.gate.set()
        await task
        assert query.result.is_success

    @pytest.mark.asyncio
    async def test_not_found_is_success(
        self, client: QueryClient, fetcher: StubFetcher, reporter: RecordingReporter
    ) -> None:
        """Test that a missing resource skips validation and is not an error."""
        fetcher.responses[URL] = NotFound("product")
        query = product_query(client)

        result = await query.fetch()

        assert result.is_success
        assert result.is_not_found
        assert result.data == NotFound("product")
        assert reporter.captured == []


class TestStaleWhileRevalidate:
    """Tests for stale and cache time windows."""

    @pytest.mark.asyncio
    async def test_fresh_data_is_served_without_request(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that no request is made within the stale time."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        clock.advance(minutes=59)
        result = await query.fetch()

        assert result.is_success
        assert not result.is_fetching
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_stale_data_is_served_while_revalidating(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that stale data comes back at once and is refreshed once."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        clock.advance(hours=2)
        fetcher.responses[URL] = {"id": 1, "name": "second"}
        stale = await query.fetch()
        again = await query.fetch()

        assert stale.data == Product(id=1, name="first")
        assert stale.is_stale
        assert stale.is_fetching
        assert again.data == Product(id=1, name="first")

        task = client.store.in_flight(query.key)
        assert task is not None
        await task
        assert len(fetcher.calls) == 2
        assert query.result.data == Product(id=1, name="second")
        assert not query.result.is_stale

    @pytest.mark.asyncio
    async def test_expired_entry_is_a_miss(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that data past its cache time is never shown."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        clock.advance(hours=25)
        fetcher.responses[URL] = {"id": 1, "name": "second"}
        result = query.observe()

        assert result.is_loading
        assert result.data is None
        assert (await query.fetch()).data == Product(id=1, name="second")
        assert len(fetcher.calls) == 2

    @pytest.mark.asyncio
    async def test_per_query_windows(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test overriding the configured windows for one query."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client, stale_time=timedelta(minutes=10))
        await query.fetch()

        clock.advance(minutes=11)

        assert query.result.is_stale

    def test_invalid_windows_are_rejected(self, client: QueryClient) -> None:
        """Test that a non-positive cache time is refused."""
        with pytest.raises(ValueError):
            product_query(client, cache_time=timedelta(0))

    @pytest.mark.asyncio
    async def test_refetch_ignores_freshness(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that refetch always goes to the network."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        fetcher.responses[URL] = {"id": 1, "name": "second"}
        result = await query.refetch()

        assert len(fetcher.calls) == 2
        assert result.data == Product(id=1, name="second")

    @pytest.mark.asyncio
    async def test_invalidate_triggers_revalidation(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that an invalidated entry is refetched on the next access."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        client.store.invalidate(query.key)
        result = await query.fetch()

        assert result.is_stale
        assert result.is_fetching
        task = client.store.in_flight(query.key)
        assert task is not None
        await task
        assert len(fetcher.calls) == 2


class TestQueryErrors:
    """Tests for fetch and validation failures."""

    @pytest.mark.asyncio
    async def test_transport_failure(
        self, client: QueryClient, fetcher: StubFetcher, reporter: RecordingReporter
    ) -> None:
        """Test that a failed request ends in ERROR and is reported once."""
        fetcher.responses[URL] = ConnectionError("offline")
        query = product_query(client, tags={"zone": 5})

        result = await query.fetch()

        assert result.is_error
        assert isinstance(result.error, TransportError)
        assert len(reporter.captured) == 1
        error, tags = reporter.captured[0]
        assert error is result.error
        assert tags == {"query": "product[id=1]", "zone": 5}

    @pytest.mark.asyncio
    async def test_validation_failure(
        self, client: QueryClient, fetcher: StubFetcher, reporter: RecordingReporter
    ) -> None:
        """Test that a bad payload ends in ERROR naming the field."""
        fetcher.responses[URL] = {"id": "one", "name": "first"}
        query = product_query(client)

        result = await query.fetch()

        assert result.is_error
        assert isinstance(result.error, ValidationError)
        assert result.error.path == "id"
        assert result.error.actual == "string 'one'"
        assert reporter.captured[0][1]["validation_error"] is True

    @pytest.mark.asyncio
    async def test_error_is_retried_on_next_access(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that an error does not stick once the service recovers."""
        fetcher.responses[URL] = ConnectionError("offline")
        query = product_query(client)
        await query.fetch()

        fetcher.responses[URL] = {"id": 1, "name": "first"}
        result = await query.fetch()

        assert result.is_success
        assert len(fetcher.calls) == 2

    @pytest.mark.asyncio
    async def test_failed_revalidation_keeps_data(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that a failed background refetch keeps the last good data."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        await query.fetch()

        clock.advance(hours=2)
        fetcher.responses[URL] = TimeoutError("slow")
        query.observe()
        task = client.store.in_flight(query.key)
        assert task is not None
        await task

        assert query.result.is_error
        assert query.result.data == Product(id=1, name="first")

    @pytest.mark.asyncio
    async def test_concurrent_failure_is_reported_once(
        self, client: QueryClient, fetcher: StubFetcher, reporter: RecordingReporter
    ) -> None:
        """Test that joined callers do not report the shared error again."""
        fetcher.responses[URL] = ConnectionError("offline")
        queries = [product_query(client) for _ in range(3)]

        results = await asyncio.gather(*(query.fetch() for query in queries))

        assert all(result.is_error for result in results)
        assert len(reporter.captured) == 1


class TestQueryGating:
    """Tests for disabled and ignored queries."""

    @pytest.mark.asyncio
    async def test_disabled_query_is_idle(self, client: QueryClient, fetcher: StubFetcher) -> None:
        """Test that a disabled query never fetches."""
        query = product_query(client, enabled=False)

        result = await query.fetch()
        refetched = await query.refetch()

        assert result.is_idle
        assert refetched.is_idle
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_out_of_scope_provider_is_ignored(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that a provider-scoped query is the sentinel for other providers."""
        query = product_query(client, provider="CAIC", scope="NWAC")

        result = await query.fetch()

        assert result.is_ignored
        assert result.data is None
        assert result.error is None
        assert fetcher.calls == []
        assert query.key not in client.store

    @pytest.mark.asyncio
    async def test_in_scope_provider_fetches(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that the scoped provider itself fetches normally."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client, provider="NWAC", scope="NWAC")

        result = await query.fetch()

        assert result.is_success
        assert not result.is_ignored


class TestPrefetch:
    """Tests for QueryClient.prefetch."""

    @pytest.mark.asyncio
    async def test_prefetch_warms_the_cache(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that a query after a prefetch needs no request."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}

        await prefetch_product(client)
        result = await product_query(client).fetch()

        assert result.is_success
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_prefetch_and_query_share_one_request(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that a query joins a prefetch that is in flight."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        fetcher.gate = asyncio.Event()

        prefetch = asyncio.ensure_future(prefetch_product(client))
        await asyncio.sleep(0)
        query = product_query(client)
        assert query.observe().is_loading
        fetcher.gate.set()
        await prefetch
        result = await query.fetch()

        assert result.is_success
        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_prefetch_skips_fresh_data(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that prefetching fresh data makes no request."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        await product_query(client).fetch()

        await prefetch_product(client)

        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_prefetch_failure_is_not_raised(
        self, client: QueryClient, fetcher: StubFetcher, reporter: RecordingReporter
    ) -> None:
        """Test that a failed prefetch is recorded and reported."""
        fetcher.responses[URL] = ConnectionError("offline")

        await prefetch_product(client)

        assert product_query(client).result.is_error
        assert len(reporter.captured) == 1


class TestQuerySubscribe:
    """Tests for change notifications."""

    @pytest.mark.asyncio
    async def test_subscribe(self, client: QueryClient, fetcher: StubFetcher) -> None:
        """Test that listeners see every status change of the key."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        query = product_query(client)
        seen: list[QueryStatus] = []
        unsubscribe = query.subscribe(lambda result: seen.append(result.status))

        await query.fetch()
        unsubscribe()
        await query.refetch()

        assert seen == [QueryStatus.LOADING, QueryStatus.SUCCESS]

    def test_repr(self, client: QueryClient) -> None:
        """Test the readable form of a query."""
        assert repr(product_query(client)) == "Query(product[id=1], status=idle)"


class TestQueryClientWiring:
    """Tests for the collaborators a QueryClient is built with."""

    def test_injected_store_is_used_even_when_empty(self, fetcher: StubFetcher) -> None:
        """Test that a fresh session store is kept as the cache context."""
        store = CacheStore()

        client = QueryClient(fetcher=fetcher, store=store)

        assert len(store) == 0
        assert client.store is store

    def test_injected_store_keeps_its_clock_and_config(
        self, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that queries see the injected store's time and windows."""
        config = CacheConfig(stale_time=timedelta(minutes=5))
        store = CacheStore(config=config, clock=clock)

        client = QueryClient(fetcher=fetcher, store=store)

        assert client.config is config
        assert client.store.now() == clock.now

    def test_default_store(self, fetcher: StubFetcher) -> None:
        """Test that a client without a store builds one from its config."""
        config = CacheConfig(max_size=10)

        client = QueryClient(fetcher=fetcher, config=config)

        assert client.config is config

    @pytest.mark.asyncio
    async def test_clients_share_an_injected_store(
        self, store: CacheStore, fetcher: StubFetcher
    ) -> None:
        """Test that two clients on one store share cached data."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        first = QueryClient(fetcher=fetcher, store=store)
        second = QueryClient(fetcher=fetcher, store=store)

        await product_query(first).fetch()
        result = await product_query(second).fetch()

        assert result.is_success
        assert len(fetcher.calls) == 1


class TestSharedCacheTime:
    """Tests for queries with different cache times on one key."""

    @pytest.mark.asyncio
    async def test_shorter_cache_time_does_not_shorten_entry(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test that a refetch by a short-lived query keeps the longer window."""
        fetcher.responses[URL] = {"id": 1, "name": "first"}
        long_lived = product_query(client, cache_time=timedelta(hours=24))
        short_lived = product_query(client, cache_time=timedelta(hours=1))
        await long_lived.fetch()

        await short_lived.refetch()
        clock.advance(hours=2)

        entry = client.store.peek(long_lived.key)
        assert entry is not None
        assert entry.cache_time == timedelta(hours=24)
