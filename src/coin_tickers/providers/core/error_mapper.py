"""Domain concept for mapping ticker exceptions to HTTP responses."""
from dataclasses import dataclass

from fastapi import HTTPException

from coin_tickers.providers.core.exceptions import (AlreadyFetchingError,
                                                     AssetNotPricedError,
                                                     FetchHistoryError)


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps fetcher exceptions to HTTP (status_code, detail)."""

    resource_name: str = "Asset"
    api_name: str = "CoinGecko"

    def to_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> tuple[int, str]:
        """Map an exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by the fetcher.
            symbol: Optional identifier to include in detail (e.g. "0xabc on 1").

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, AlreadyFetchingError):
            return (409, "Prices are already being fetched; retry later")
        if isinstance(exc, AssetNotPricedError):
            detail = (
                f"{self.resource_name} has no price yet"
                if symbol is None
                else f"{self.resource_name} '{symbol}' has no price yet"
            )
            return (404, detail)
        if isinstance(exc, FetchHistoryError):
            return (502, f"{self.api_name} history unavailable")
        return (500, "Internal server error")

    def raise_http(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, symbol=symbol)
        raise HTTPException(status_code=status_code, detail=detail) from exc
