"""In-memory caches for price snapshots and chart histories."""
from coin_tickers.schemas import (AssetKey, ChartHistory, ChartHistoryPeriod,
                                  CoinTicker)


class PriceCache:
    """Latest CoinTicker per wallet asset plus the fingerprint of the last fetch.

    Entries are replaced per key on each fetch and never evicted, so assets that
    are no longer requested keep their last known price.
    """

    def __init__(self) -> None:
        self._tickers: dict[AssetKey, CoinTicker] = {}
        self.last_ticker_ids: frozenset[str] | None = None
        self.last_fetched_at: float | None = None

    def get(self, key: AssetKey) -> CoinTicker | None:
        return self._tickers.get(key)

    def snapshot(self) -> dict[AssetKey, CoinTicker]:
        """Copy of every cached ticker."""
        return dict(self._tickers)

    def is_fresh_for(self, ticker_ids: frozenset[str], now: float, lifetime: float) -> bool:
        """True if the last fetch was for the same ids and is at most `lifetime` old."""
        if self.last_ticker_ids is None or self.last_fetched_at is None:
            return False
        if self.last_ticker_ids != ticker_ids:
            return False
        return now - self.last_fetched_at <= lifetime

    def update(
        self,
        tickers: dict[AssetKey, CoinTicker],
        ticker_ids: frozenset[str],
        fetched_at: float,
    ) -> None:
        """Merge a fetch result and record its fingerprint."""
        self._tickers.update(tickers)
        self.last_ticker_ids = ticker_ids
        self.last_fetched_at = fetched_at

    def __len__(self) -> int:
        return len(self._tickers)


class HistoryCache:
    """Chart histories keyed by ticker snapshot and period.

    Day charts expire after `day_lifetime` seconds; longer periods never expire.
    Empty histories are not stored.
    """

    def __init__(self, day_lifetime: float) -> None:
        self._day_lifetime = day_lifetime
        self._entries: dict[
            tuple[str, float], dict[ChartHistoryPeriod, tuple[ChartHistory, float]]
        ] = {}

    def get(
        self, ticker: CoinTicker, period: ChartHistoryPeriod, now: float
    ) -> ChartHistory | None:
        """Return the cached history, or None if missing or expired."""
        cached = self._entries.get(ticker.history_key, {}).get(period)
        if cached is None:
            return None
        history, fetched_at = cached
        if period is ChartHistoryPeriod.DAY and now - fetched_at > self._day_lifetime:
            return None
        return history

    def set(
        self,
        ticker: CoinTicker,
        period: ChartHistoryPeriod,
        history: ChartHistory,
        fetched_at: float,
    ) -> bool:
        """Store a history; returns False (and stores nothing) if it is empty."""
        if history.is_empty:
            return False
        self._entries.setdefault(ticker.history_key, {})[period] = (history, fetched_at)
        return True
