"""Protocols for price data providers."""
from typing import Protocol

from coin_tickers.schemas import CatalogEntry, ChartHistory, CoinTicker


class ProviderClient(Protocol):
    """Transport for the price provider (CoinGecko or a test double).

    Methods raise on transport or decode failure; retries and fallbacks are the
    caller's concern.
    """

    async def fetch_supported_tickers(self) -> list[CatalogEntry]:
        """Fetch the full catalog of coins with their platform addresses."""
        ...

    async def fetch_prices_page(
        self, ids: list[str], currency: str, page: int
    ) -> list[CoinTicker]:
        """Fetch one page of price snapshots for the given coin ids."""
        ...

    async def fetch_price_history(
        self, ticker_id: str, currency: str, days: int
    ) -> ChartHistory:
        """Fetch the price series for a coin over the last `days` days."""
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...
