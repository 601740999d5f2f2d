"""Pydantic schemas for tickers, catalog entries and chart histories. Not persisted."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coin_tickers.utils import normalize_address, parse_timestamp


class AssetKey(BaseModel):
    """Identity of a wallet-held asset: contract address on a chain."""

    model_config = ConfigDict(frozen=True)

    address: str
    chain_id: int

    @field_validator("address")
    @classmethod
    def _canonical_address(cls, value: str) -> str:
        return normalize_address(value)


class RequestedAsset(BaseModel):
    """A wallet token the caller wants priced."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    key: AssetKey

    @classmethod
    def of(cls, symbol: str, address: str, chain_id: int) -> "RequestedAsset":
        return cls(symbol=symbol, key=AssetKey(address=address, chain_id=chain_id))


class CatalogEntry(BaseModel):
    """A coin known to CoinGecko with its per-platform contract addresses."""

    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    name: str = ""
    platforms: dict[str, str] = Field(default_factory=dict)

    @field_validator("platforms", mode="before")
    @classmethod
    def _canonical_platforms(cls, value: dict[str, str | None] | None) -> dict[str, str]:
        if not value:
            return {}
        return {
            platform: normalize_address(address)
            for platform, address in value.items()
            if address is not None
        }


class MappedTickerId(BaseModel):
    """A requested asset resolved to its CoinGecko id."""

    model_config = ConfigDict(frozen=True)

    ticker_id: str
    key: AssetKey


class CoinTicker(BaseModel):
    """Price snapshot for one coin, as returned by /coins/markets."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    symbol: str = ""
    name: str = ""
    image: str | None = None
    price_usd: float = Field(default=0.0, alias="current_price")
    market_cap: float | None = None
    market_cap_rank: int | None = None
    total_volume: float | None = None
    high_24h: float | None = None
    low_24h: float | None = None
    price_change_24h: float | None = None
    percent_change_24h: float | None = Field(
        default=None, alias="price_change_percentage_24h"
    )
    last_updated: datetime | None = None

    @field_validator("price_usd", mode="before")
    @classmethod
    def _price_or_zero(cls, value: float | None) -> float:
        return 0.0 if value is None else value

    @field_validator("last_updated", mode="before")
    @classmethod
    def _parse_last_updated(
        cls, value: datetime | float | str | None
    ) -> datetime | None:
        if isinstance(value, datetime):
            return value
        return parse_timestamp(value)

    @property
    def history_key(self) -> tuple[str, float]:
        """Key for chart history caching; a new price means a new entry."""
        return (self.id, self.price_usd)


class ChartHistoryPeriod(str, Enum):
    """Chart ranges offered to the wallet UI."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTH = "threeMonth"
    YEAR = "year"

    @property
    def days(self) -> int:
        """Number of days requested from the provider for this period."""
        return _PERIOD_DAYS[self]


_PERIOD_DAYS = {
    ChartHistoryPeriod.DAY: 1,
    ChartHistoryPeriod.WEEK: 7,
    ChartHistoryPeriod.MONTH: 30,
    ChartHistoryPeriod.THREE_MONTH: 90,
    ChartHistoryPeriod.YEAR: 365,
}


class ChartHistory(BaseModel):
    """Price series as (timestamp in ms, price) pairs."""

    prices: list[tuple[float, float]] = Field(default_factory=list)

    @field_validator("prices", mode="before")
    @classmethod
    def _none_is_empty(
        cls, value: list[list[float]] | None
    ) -> list[list[float]]:
        if value is None:
            return []
        return [point[:2] for point in value]

    @classmethod
    def empty(cls) -> "ChartHistory":
        return cls(prices=[])

    @property
    def is_empty(self) -> bool:
        return not self.prices


class TokenIn(BaseModel):
    """HTTP request item for a wallet token."""

    symbol: str
    address: str
    chain_id: int

    def to_requested(self) -> RequestedAsset:
        return RequestedAsset.of(self.symbol, self.address, self.chain_id)


class PricesRequest(BaseModel):
    """Body of POST /tickers/prices."""

    tokens: list[TokenIn]


class PricedAsset(BaseModel):
    """HTTP response item: a wallet asset and its price snapshot."""

    address: str
    chain_id: int
    ticker: CoinTicker


__all__ = [
    "AssetKey",
    "CatalogEntry",
    "ChartHistory",
    "ChartHistoryPeriod",
    "CoinTicker",
    "MappedTickerId",
    "PricedAsset",
    "PricesRequest",
    "RequestedAsset",
    "TokenIn",
]
