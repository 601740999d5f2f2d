"""Fixtures shared by the ticker tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from coin_tickers.chains import Chain
from coin_tickers.schemas import (CatalogEntry, ChartHistory, CoinTicker,
                                  RequestedAsset)
from coin_tickers.services import CoinTickersFetcher, TickerIdRegistry

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
USDC_POLYGON = "0x2791bca1f2de4661ed88a30c99a7a9449aa84174"
LINK = "0x514910771af9ca656af840dff83e8264ecf986ca"
NATIVE = "0x0000000000000000000000000000000000000000"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def ticker(ticker_id: str, price: float = 1.0, symbol: str = "") -> CoinTicker:
    return CoinTicker(id=ticker_id, symbol=symbol or ticker_id, price_usd=price)


def history(*prices: float) -> ChartHistory:
    return ChartHistory(prices=[(1_600_000_000_000 + i, p) for i, p in enumerate(prices)])


@pytest.fixture
def catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(id="ethereum", symbol="eth", name="Ethereum", platforms={}),
        CatalogEntry(
            id="usd-coin",
            symbol="usdc",
            name="USD Coin",
            platforms={"ethereum": USDC, "polygon-pos": USDC_POLYGON},
        ),
        CatalogEntry(
            id="chainlink", symbol="link", name="Chainlink", platforms={"ethereum": LINK}
        ),
    ]


@pytest.fixture
def tokens() -> dict[int, list[RequestedAsset]]:
    return {
        Chain.MAIN: [
            RequestedAsset.of("ETH", NATIVE, Chain.MAIN),
            RequestedAsset.of("USDC", USDC, Chain.MAIN),
        ],
        Chain.POLYGON: [RequestedAsset.of("USDC", USDC_POLYGON, Chain.POLYGON)],
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_client(catalog: list[CatalogEntry]) -> MagicMock:
    """A ProviderClient whose prices come in one page followed by an empty page."""
    client = MagicMock()
    client.fetch_supported_tickers = AsyncMock(return_value=catalog)
    client.fetch_prices_page = AsyncMock(
        side_effect=lambda ids, currency, page: (
            [ticker(i, price=float(len(i))) for i in ids] if page == 1 else []
        )
    )
    client.fetch_price_history = AsyncMock(return_value=history(1.0, 2.0, 3.0))
    client.close = AsyncMock()
    return client


@pytest.fixture
def registry(mock_client: MagicMock) -> TickerIdRegistry:
    return TickerIdRegistry(mock_client)


@pytest.fixture
def fetcher(
    mock_client: MagicMock, registry: TickerIdRegistry, clock: FakeClock
) -> CoinTickersFetcher:
    return CoinTickersFetcher(mock_client, registry, clock=clock)
