"""FastAPI dependency injection: app.state holds the container; Depends() resolves services.

Lifespan (main.py) creates the container once and attaches it to app.state.
"""
from typing import Annotated

from fastapi import Depends, Request

from coin_tickers.providers.core import ProviderErrorMapper
from coin_tickers.services import CoinTickersFetcher, TickerIdRegistry


def get_tickers_fetcher(request: Request) -> CoinTickersFetcher:
    """Resolve the CoinTickersFetcher singleton from the app container."""
    return request.app.state.container.tickers_fetcher()


def get_ticker_registry(request: Request) -> TickerIdRegistry:
    """Resolve the shared TickerIdRegistry from the app container."""
    return request.app.state.container.ticker_registry()


def get_error_mapper(request: Request) -> ProviderErrorMapper:
    return request.app.state.container.error_mapper()


# Type aliases for route injection
TickersFetcherDep = Annotated[CoinTickersFetcher, Depends(get_tickers_fetcher)]
TickerRegistryDep = Annotated[TickerIdRegistry, Depends(get_ticker_registry)]
ErrorMapperDep = Annotated[ProviderErrorMapper, Depends(get_error_mapper)]
