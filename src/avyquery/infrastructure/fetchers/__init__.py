"""Fetcher implementations."""

from avyquery.infrastructure.fetchers.httpx import HttpxFetcher

__all__ = ["HttpxFetcher"]
