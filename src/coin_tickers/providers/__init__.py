"""Price data providers.

- CoinGeckoClient: catalog, prices and chart history via the CoinGecko API

Providers implement the ProviderClient protocol and return CatalogEntry,
CoinTicker and ChartHistory objects.

Example:
    client = CoinGeckoClient()
    try:
        page = await client.fetch_prices_page(["ethereum"], "usd", page=1)
        print(f"{page[0].id}: ${page[0].price_usd}")
    finally:
        await client.close()
"""
from coin_tickers.providers.coingecko import CoinGeckoClient
from coin_tickers.providers.core import ProviderClient

__all__ = [
    "CoinGeckoClient",
    "ProviderClient",
]
