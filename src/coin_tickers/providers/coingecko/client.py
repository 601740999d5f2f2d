"""CoinGecko client: catalog, paginated prices and price history."""
import logging

import httpx

from coin_tickers.providers.coingecko.models import (CoinGeckoCoinsListParams,
                                                      CoinGeckoMarketChartParams,
                                                      CoinGeckoMarketsParams)
from coin_tickers.schemas import CatalogEntry, ChartHistory, CoinTicker

logger = logging.getLogger(__name__)


class CoinGeckoClient:
    """ProviderClient backed by the CoinGecko REST API.

    Uses CoinGecko coin ids (e.g. "ethereum", "usd-coin") as ticker ids.
    Every method raises on HTTP or decode errors; the fetcher decides whether
    to retry or degrade.
    """

    BASE_URL = "https://api.coingecko.com/api/v3"
    PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        timeout: float = 15.0,
        per_page: int = 250,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the CoinGecko client.

        Args:
            api_key: CoinGecko Pro API key. Selects the Pro endpoint when set.
            timeout: Request timeout in seconds.
            per_page: Page size for /coins/markets.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._api_key = api_key
        self._per_page = per_page

        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            headers["x-cg-pro-api-key"] = self._api_key

        base = self.PRO_BASE_URL if self._api_key else self.BASE_URL
        self._client = httpx.AsyncClient(
            base_url=base, headers=headers, timeout=timeout, transport=transport
        )

    async def fetch_supported_tickers(self) -> list[CatalogEntry]:
        """Fetch every coin CoinGecko prices, with its contract per platform."""
        params = CoinGeckoCoinsListParams().model_dump()
        response = await self._client.get("/coins/list", params=params)
        response.raise_for_status()
        entries = [CatalogEntry.model_validate(item) for item in response.json()]
        logger.info("Fetched %d supported tickers from CoinGecko", len(entries))
        return entries

    async def fetch_prices_page(
        self, ids: list[str], currency: str, page: int
    ) -> list[CoinTicker]:
        """Fetch one page of /coins/markets for the given ids.

        An empty list means there are no more pages.
        """
        params = CoinGeckoMarketsParams(
            vs_currency=currency, page=page, per_page=self._per_page
        ).model_dump() | {"ids": ",".join(ids)}
        response = await self._client.get("/coins/markets", params=params)
        response.raise_for_status()
        return [CoinTicker.model_validate(item) for item in response.json()]

    async def fetch_price_history(
        self, ticker_id: str, currency: str, days: int
    ) -> ChartHistory:
        """Fetch /coins/{id}/market_chart; missing `prices` decodes as empty."""
        params = CoinGeckoMarketChartParams(vs_currency=currency, days=days).model_dump()
        response = await self._client.get(
            f"/coins/{ticker_id}/market_chart", params=params
        )
        response.raise_for_status()
        data = response.json()
        prices = data.get("prices") if isinstance(data, dict) else None
        return ChartHistory.model_validate({"prices": prices})

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
