"""Pytest configuration for avyquery tests."""

import pytest

from avyquery import CacheConfig, CacheStore, QueryClient
from tests.fakes import FakeClock, RecordingReporter, StubFetcher


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def fetcher() -> StubFetcher:
    """Create a stub fetcher with no canned responses."""
    return StubFetcher()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Create a recording error reporter."""
    return RecordingReporter()


@pytest.fixture
def store(clock: FakeClock) -> CacheStore:
    """Create a cache store driven by the fake clock."""
    return CacheStore(config=CacheConfig(), clock=clock)


@pytest.fixture
def client(
    fetcher: StubFetcher, store: CacheStore, reporter: RecordingReporter
) -> QueryClient:
    """Create a query client wired to the fakes."""
    return QueryClient(fetcher=fetcher, store=store, reporter=reporter)
