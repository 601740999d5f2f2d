"""DI container. Build via init_container(); routes resolve services through deps.py."""
from dependency_injector import containers, providers

from coin_tickers.providers import CoinGeckoClient
from coin_tickers.providers.core import ProviderErrorMapper
from coin_tickers.services import CoinTickersFetcher, TickerIdRegistry
from coin_tickers.services.tickers_fetcher import (DAY_HISTORY_CACHE_LIFETIME,
                                                   PRICES_CACHE_LIFETIME)


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    coingecko_client = providers.Singleton(
        CoinGeckoClient,
        api_key=config.coingecko.api_key,
        timeout=config.coingecko.timeout,
    )

    # One catalog per process, shared by every fetcher.
    ticker_registry = providers.Singleton(TickerIdRegistry, coingecko_client)

    tickers_fetcher = providers.Singleton(
        CoinTickersFetcher,
        coingecko_client,
        ticker_registry,
        prices_cache_lifetime=config.cache.prices_lifetime,
        day_history_cache_lifetime=config.cache.day_history_lifetime,
    )

    error_mapper = providers.Singleton(
        ProviderErrorMapper, resource_name="Asset", api_name="CoinGecko"
    )


def init_container() -> Container:
    """Create the container and load configuration from the environment."""
    container = Container()
    container.config.coingecko.api_key.from_env("COINGECKO_API_KEY", default=None)
    container.config.coingecko.timeout.from_env(
        "COINGECKO_TIMEOUT", as_=float, default=15.0
    )
    container.config.cache.prices_lifetime.from_env(
        "PRICES_CACHE_LIFETIME", as_=float, default=float(PRICES_CACHE_LIFETIME)
    )
    container.config.cache.day_history_lifetime.from_env(
        "DAY_HISTORY_CACHE_LIFETIME",
        as_=float,
        default=float(DAY_HISTORY_CACHE_LIFETIME),
    )
    return container
