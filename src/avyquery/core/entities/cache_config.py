"""Cache and client configuration entities."""

import os
from dataclasses import dataclass
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides the default time windows applied to every query, which a
    single query may override.

    Attributes:
        stale_time: How long fetched data is served without a network call.
            After this, a hit still returns the data but revalidates it in
            the background.
        cache_time: How long an entry survives without being accessed.
        max_size: Maximum number of entries kept in the store.
    """

    stale_time: timedelta = timedelta(hours=1)
    cache_time: timedelta = timedelta(hours=24)
    max_size: int = 1000

    def __post_init__(self) -> None:
        """Check the windows."""
        check_windows(self.stale_time, self.cache_time)
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")


def check_windows(stale_time: timedelta, cache_time: timedelta) -> None:
    """Reject time windows the store cannot honor.

    Raises:
        ValueError: If stale_time is negative or cache_time is not positive.
    """
    if stale_time < timedelta(0):
        raise ValueError("stale_time must not be negative")
    if cache_time <= timedelta(0):
        raise ValueError("cache_time must be positive")


@dataclass
class ClientConfig:
    """Hosts of the remote services queried by avyquery."""

    national_avalanche_center_host: str = "https://api.avalanche.org"
    nwac_host: str = "https://nwac.us"
    snowbound_host: str = "https://api.snowobs.com"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Read hosts from ``AVYQUERY_*`` environment variables.

        Unset variables keep the production defaults.
        """
        defaults = cls()
        return cls(
            national_avalanche_center_host=os.getenv(
                "AVYQUERY_NAC_HOST", defaults.national_avalanche_center_host
            ),
            nwac_host=os.getenv("AVYQUERY_NWAC_HOST", defaults.nwac_host),
            snowbound_host=os.getenv(
                "AVYQUERY_SNOWBOUND_HOST", defaults.snowbound_host
            ),
        )
