"""Models for CoinGecko API params."""
from pydantic import BaseModel


class CoinGeckoCoinsListParams(BaseModel):
    """Params for /coins/list (supported tickers with platform addresses)."""

    include_platform: str = "true"


class CoinGeckoMarketsParams(BaseModel):
    """Params for /coins/markets (one page of prices). Merge with 'ids' at call site."""

    vs_currency: str = "usd"
    page: int = 1
    per_page: int = 250
    sparkline: str = "false"
    price_change_percentage: str = "24h"


class CoinGeckoMarketChartParams(BaseModel):
    """Params for /coins/{id}/market_chart (price history)."""

    vs_currency: str = "usd"
    days: int
