"""CoinGecko price provider."""
from coin_tickers.providers.coingecko.client import CoinGeckoClient

__all__ = ["CoinGeckoClient"]
