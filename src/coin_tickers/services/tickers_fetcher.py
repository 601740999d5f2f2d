"""Fetches and caches wallet token prices and chart histories from CoinGecko.

CoinTickersFetcher is the façade over TickerIdRegistry, PriceCache and
HistoryCache. It must be used from a single event loop: cache state and the
in-progress flag are only touched between awaits, so the loop serializes every
mutation.
"""
import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Mapping

from coin_tickers.providers.core.exceptions import (PROVIDER_EXCEPTIONS,
                                                     AlreadyFetchingError,
                                                     AssetNotPricedError,
                                                     FetchHistoryError)
from coin_tickers.providers.core.protocols import ProviderClient
from coin_tickers.providers.core.retry import DEFAULT_ATTEMPTS, retry_or_default
from coin_tickers.schemas import (AssetKey, ChartHistory, ChartHistoryPeriod,
                                  CoinTicker, MappedTickerId, RequestedAsset)
from coin_tickers.services.cache import HistoryCache, PriceCache
from coin_tickers.services.ticker_registry import TickerIdRegistry

logger = logging.getLogger(__name__)

CURRENCY = "usd"
PRICES_CACHE_LIFETIME = 60 * 60
DAY_HISTORY_CACHE_LIFETIME = 60 * 60


class CoinTickersFetcher:
    """Resolves wallet tokens to CoinGecko ids and serves cached prices and charts."""

    def __init__(
        self,
        client: ProviderClient,
        registry: TickerIdRegistry,
        *,
        prices_cache_lifetime: float = PRICES_CACHE_LIFETIME,
        day_history_cache_lifetime: float = DAY_HISTORY_CACHE_LIFETIME,
        attempts: int = DEFAULT_ATTEMPTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Provider for prices and chart history.
            registry: Shared ticker catalog.
            prices_cache_lifetime: Seconds a price fetch stays fresh for the same ids.
            day_history_cache_lifetime: Seconds a day chart stays fresh.
            attempts: Attempts per provider request and per history lookup.
            clock: Monotonic time source in seconds.
        """
        self._client = client
        self._registry = registry
        self._prices_cache_lifetime = prices_cache_lifetime
        self._attempts = attempts
        self._clock = clock
        self._prices = PriceCache()
        self._histories = HistoryCache(day_lifetime=day_history_cache_lifetime)
        self._is_fetching_prices = False

    @property
    def is_fetching_prices(self) -> bool:
        return self._is_fetching_prices

    def cached_ticker(self, key: AssetKey) -> CoinTicker | None:
        """Last fetched price snapshot for an asset, if any."""
        return self._prices.get(key)

    async def fetch_prices(
        self, tokens_by_chain: Mapping[int, Iterable[RequestedAsset]]
    ) -> dict[AssetKey, CoinTicker]:
        """Fetch prices for wallet tokens grouped by chain id.

        Returns every cached price. The cache is reused when the resolved ids
        match the last fetch and it is still fresh; otherwise every page is
        fetched again and merged into it first.

        Raises:
            AlreadyFetchingError: Another fetch_prices call is in progress.
        """
        if self._is_fetching_prices:
            raise AlreadyFetchingError()
        self._is_fetching_prices = True
        try:
            tokens = [token for tokens in tokens_by_chain.values() for token in tokens]
            mapped = await self._registry.map_tokens(tokens)
            ticker_ids = frozenset(m.ticker_id for m in mapped)

            if self._prices.is_fresh_for(
                ticker_ids, self._clock(), self._prices_cache_lifetime
            ):
                logger.debug("Prices cache hit for %d tickers", len(ticker_ids))
                return self._prices.snapshot()

            if ticker_ids:
                tickers = await self._fetch_all_pages(sorted(ticker_ids), mapped)
            else:
                tickers = {}
            self._prices.update(tickers, ticker_ids, self._clock())
            return self._prices.snapshot()
        finally:
            self._is_fetching_prices = False

    async def _fetch_all_pages(
        self, ids: list[str], mapped: list[MappedTickerId]
    ) -> dict[AssetKey, CoinTicker]:
        results: dict[AssetKey, CoinTicker] = {}
        page = 1
        while True:
            page_results = await self._fetch_prices_page(ids, mapped, page)
            if not page_results:
                break
            results.update(page_results)
            page += 1
        logger.info(
            "Fetched prices for %d assets (%d tickers) in %d page(s)",
            len(results),
            len(ids),
            page,
        )
        return results

    async def _fetch_prices_page(
        self, ids: list[str], mapped: list[MappedTickerId], page: int
    ) -> dict[AssetKey, CoinTicker]:
        tickers = await retry_or_default(
            lambda: self._client.fetch_prices_page(ids, CURRENCY, page),
            list,
            description=f"prices page {page}",
            attempts=self._attempts,
        )
        keys_by_id: dict[str, list[AssetKey]] = {}
        for m in mapped:
            keys_by_id.setdefault(m.ticker_id, []).append(m.key)

        results: dict[AssetKey, CoinTicker] = {}
        for ticker in tickers:
            for key in keys_by_id.get(ticker.id, []):
                results[key] = ticker
        return results

    async def fetch_chart_histories(self, key: AssetKey) -> list[ChartHistory]:
        """Fetch every chart period for an asset, in ChartHistoryPeriod order.

        Fails as a whole if any period fails.
        """
        return list(
            await asyncio.gather(
                *(
                    self.fetch_chart_history(key, period, force=False)
                    for period in ChartHistoryPeriod
                )
            )
        )

    async def fetch_chart_history(
        self,
        key: AssetKey,
        period: ChartHistoryPeriod,
        force: bool = False,
    ) -> ChartHistory:
        """Return the chart for an asset's cached ticker, fetching it if needed.

        Args:
            key: A previously priced asset.
            period: Chart range.
            force: Skip the cache and refetch.

        Raises:
            AssetNotPricedError: No price has been fetched for `key`.
            FetchHistoryError: Every attempt failed.
        """
        if self._prices.get(key) is None:
            raise AssetNotPricedError(key)

        last_error: Exception | None = None
        for attempt in range(1, self._attempts + 1):
            try:
                return await self._cached_or_fetched_history(key, period, force)
            except PROVIDER_EXCEPTIONS as exc:
                last_error = exc
                logger.warning(
                    "Chart history %s for %s failed (attempt %d/%d): %s",
                    period.value,
                    key,
                    attempt,
                    self._attempts,
                    exc,
                )
        raise FetchHistoryError(
            f"Could not fetch {period.value} chart for {key}"
        ) from last_error

    async def _cached_or_fetched_history(
        self, key: AssetKey, period: ChartHistoryPeriod, force: bool
    ) -> ChartHistory:
        ticker = self._prices.get(key)
        if ticker is None:
            raise AssetNotPricedError(key)

        if not force:
            cached = self._histories.get(ticker, period, self._clock())
            if cached is not None:
                logger.debug("Chart cache hit for %s %s", ticker.id, period.value)
                return cached

        history = await retry_or_default(
            lambda: self._client.fetch_price_history(ticker.id, CURRENCY, period.days),
            ChartHistory.empty,
            description=f"{period.value} chart for {ticker.id}",
            attempts=self._attempts,
        )
        self._histories.set(ticker, period, history, self._clock())
        return history
