"""Tests for the station time-series query."""

from datetime import date

import pytest

from avyquery import QueryClient
from avyquery.queries import station_timeseries_query
from tests import payloads
from tests.fakes import FakeClock, StubFetcher

URL = "https://api.snowobs.com/wxdata/getobs"
START = date(2024, 1, 4)
END = date(2024, 1, 5)


class TestStationTimeSeriesQuery:
    """Tests for station_timeseries_query."""

    @pytest.mark.asyncio
    async def test_fetch(self, client: QueryClient, fetcher: StubFetcher) -> None:
        """Test fetching readings for several stations."""
        fetcher.responses[URL] = payloads.station_timeseries()
        query = station_timeseries_query(client, [10, 4], START, END)

        result = await query.fetch()

        assert result.is_success
        assert fetcher.calls == [
            (
                "GET",
                URL,
                {
                    "stid": "4,10",
                    "source": "nwac",
                    "start_date": "2024-01-04",
                    "end_date": "2024-01-05",
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_station_order_does_not_matter(self, client: QueryClient) -> None:
        """Test that a station set in any order gives one key."""
        assert (
            station_timeseries_query(client, [10, 4], START, END).key
            == station_timeseries_query(client, [4, 10], START, END).key
        )

    @pytest.mark.asyncio
    async def test_disabled_without_stations(
        self, client: QueryClient, fetcher: StubFetcher
    ) -> None:
        """Test that no request is made before a station is selected."""
        result = await station_timeseries_query(client, [], START, END).fetch()

        assert result.is_idle
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_readings_go_stale_quickly(
        self, client: QueryClient, fetcher: StubFetcher, clock: FakeClock
    ) -> None:
        """Test the shorter stale time of station readings."""
        fetcher.responses[URL] = payloads.station_timeseries()
        query = station_timeseries_query(client, [10], START, END)
        await query.fetch()

        clock.advance(minutes=15)

        assert query.result.is_stale
