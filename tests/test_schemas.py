"""Schema normalization and container configuration."""
from datetime import datetime, timezone

from conftest import USDC

from coin_tickers.container import init_container
from coin_tickers.schemas import (AssetKey, ChartHistory, ChartHistoryPeriod,
                                  CoinTicker, RequestedAsset)
from coin_tickers.services import CoinTickersFetcher
from coin_tickers.utils import NULL_ADDRESS, is_null_address, normalize_address


def test_asset_key_is_canonical_and_hashable():
    mixed = AssetKey(address=" 0xA0B86991C6218B36C1D19D4A2E9EB0CE3606EB48 ", chain_id=1)
    assert mixed == AssetKey(address=USDC, chain_id=1)
    assert {mixed: "usdc"}[AssetKey(address=USDC, chain_id=1)] == "usdc"
    assert mixed != AssetKey(address=USDC, chain_id=137)


def test_requested_asset_builder():
    asset = RequestedAsset.of("USDC", USDC, 137)
    assert asset.key == AssetKey(address=USDC, chain_id=137)


def test_null_addresses():
    assert normalize_address("") == NULL_ADDRESS
    assert is_null_address("0x0")
    assert is_null_address(NULL_ADDRESS)
    assert not is_null_address(USDC)


def test_period_days_and_order():
    assert [p.days for p in ChartHistoryPeriod] == [1, 7, 30, 90, 365]
    assert ChartHistoryPeriod("threeMonth") is ChartHistoryPeriod.THREE_MONTH


def test_ticker_missing_price_is_zero():
    coin = CoinTicker.model_validate({"id": "dead-coin", "current_price": None})
    assert coin.price_usd == 0.0
    assert coin.history_key == ("dead-coin", 0.0)


def test_ticker_last_updated_parsing():
    iso = CoinTicker.model_validate(
        {"id": "bitcoin", "current_price": 1.0, "last_updated": "2024-01-02T03:04:05.000Z"}
    )
    unix = CoinTicker.model_validate({"id": "bitcoin", "current_price": 1.0, "last_updated": 0})

    assert iso.last_updated == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert unix.last_updated == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert CoinTicker.model_validate({"id": "bitcoin"}).last_updated is None


def test_chart_history_drops_extra_columns_and_null():
    assert ChartHistory.model_validate({"prices": None}).is_empty
    chart = ChartHistory.model_validate({"prices": [[1000, 2.5, 99]]})
    assert chart.prices == [(1000.0, 2.5)]


def test_container_reads_environment(monkeypatch):
    monkeypatch.setenv("PRICES_CACHE_LIFETIME", "120")
    monkeypatch.setenv("DAY_HISTORY_CACHE_LIFETIME", "30")
    monkeypatch.delenv("COINGECKO_API_KEY", raising=False)

    container = init_container()

    assert container.config.cache.prices_lifetime() == 120.0
    assert container.config.cache.day_history_lifetime() == 30.0
    assert container.config.coingecko.timeout() == 15.0
    assert isinstance(container.tickers_fetcher(), CoinTickersFetcher)
    assert container.tickers_fetcher()._registry is container.ticker_registry()
