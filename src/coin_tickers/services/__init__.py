"""Service layer: ticker resolution, caching and fetch orchestration."""
from coin_tickers.services.cache import HistoryCache, PriceCache
from coin_tickers.services.ticker_registry import TickerIdRegistry
from coin_tickers.services.tickers_fetcher import CoinTickersFetcher

__all__ = [
    "CoinTickersFetcher",
    "HistoryCache",
    "PriceCache",
    "TickerIdRegistry",
]
