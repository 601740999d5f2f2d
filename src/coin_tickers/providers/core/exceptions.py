"""Ticker fetching errors and the provider failures absorbed by retries."""
import asyncio

import httpx


class TickersError(Exception):
    """Base class for errors surfaced to callers of CoinTickersFetcher."""


class AlreadyFetchingError(TickersError):
    """A bulk price fetch is already running on this fetcher; retry later."""

    def __init__(self) -> None:
        super().__init__("Already fetching prices")


class AssetNotPricedError(TickersError):
    """Chart history was requested for an asset that has no cached price yet."""

    def __init__(self, key: object) -> None:
        super().__init__(f"No price cached for {key}")
        self.key = key


class FetchHistoryError(TickersError):
    """Chart history could not be fetched after retrying."""


# Transport and decode failures from a ProviderClient. These are retried once and
# then degraded to an empty result; anything else propagates.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
)
