"""Core provider abstractions."""
from coin_tickers.providers.core.error_mapper import ProviderErrorMapper
from coin_tickers.providers.core.exceptions import (PROVIDER_EXCEPTIONS,
                                                     AlreadyFetchingError,
                                                     AssetNotPricedError,
                                                     FetchHistoryError,
                                                     TickersError)
from coin_tickers.providers.core.protocols import ProviderClient
from coin_tickers.providers.core.retry import retry_or_default

__all__ = [
    "PROVIDER_EXCEPTIONS",
    "AlreadyFetchingError",
    "AssetNotPricedError",
    "FetchHistoryError",
    "ProviderClient",
    "ProviderErrorMapper",
    "TickersError",
    "retry_or_default",
]
