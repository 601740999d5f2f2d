"""CoinGeckoClient request building and payload decoding."""
import httpx
import pytest
from conftest import NATIVE, USDC

from coin_tickers.providers import CoinGeckoClient


def make_client(handler, **kwargs) -> CoinGeckoClient:
    return CoinGeckoClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_supported_tickers_decoding():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v3/coins/list"
        assert request.url.params["include_platform"] == "true"
        return httpx.Response(
            200,
            json=[
                {"id": "ethereum", "symbol": "eth", "name": "Ethereum", "platforms": {"ethereum": ""}},
                {"id": "usd-coin", "symbol": "usdc", "name": "USD Coin", "platforms": {"ethereum": USDC.upper().replace("0X", "0x")}},
                {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin", "platforms": None},
                {"id": "weird", "symbol": "wrd", "name": "Weird", "platforms": {"ethereum": None}},
            ],
        )

    client = make_client(handler)
    entries = await client.fetch_supported_tickers()
    await client.close()

    assert [e.id for e in entries] == ["ethereum", "usd-coin", "bitcoin", "weird"]
    assert entries[0].platforms == {"ethereum": NATIVE}
    assert entries[1].platforms == {"ethereum": USDC}
    assert entries[2].platforms == {}
    assert entries[3].platforms == {}


@pytest.mark.asyncio
async def test_prices_page_request_and_decoding():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v3/coins/markets"
        params = request.url.params
        assert params["ids"] == "ethereum,usd-coin"
        assert params["vs_currency"] == "usd"
        assert params["page"] == "2"
        return httpx.Response(
            200,
            json=[
                {
                    "id": "ethereum",
                    "symbol": "eth",
                    "name": "Ethereum",
                    "current_price": 3012.5,
                    "market_cap": 362000000000,
                    "market_cap_rank": 2,
                    "price_change_percentage_24h": -1.25,
                    "last_updated": "2024-05-01T12:00:00.000Z",
                }
            ],
        )

    client = make_client(handler)
    tickers = await client.fetch_prices_page(["ethereum", "usd-coin"], "usd", page=2)
    await client.close()

    assert len(tickers) == 1
    eth = tickers[0]
    assert eth.price_usd == 3012.5
    assert eth.percent_change_24h == -1.25
    assert eth.market_cap_rank == 2
    assert eth.last_updated is not None and eth.last_updated.year == 2024


@pytest.mark.asyncio
async def test_price_history_decoding():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v3/coins/usd-coin/market_chart"
        assert request.url.params["days"] == "7"
        return httpx.Response(
            200,
            json={"prices": [[1714564800000, 1.0001], [1714568400000, 0.9998]], "market_caps": []},
        )

    client = make_client(handler)
    result = await client.fetch_price_history("usd-coin", "usd", 7)
    await client.close()

    assert result.prices == [(1714564800000, 1.0001), (1714568400000, 0.9998)]


@pytest.mark.asyncio
async def test_price_history_without_prices_is_empty():
    client = make_client(lambda request: httpx.Response(200, json={"error": "coin not found"}))
    result = await client.fetch_price_history("nope", "usd", 1)
    await client.close()

    assert result.is_empty


@pytest.mark.asyncio
async def test_http_errors_raise():
    client = make_client(lambda request: httpx.Response(429, json={"status": "rate limited"}))
    with pytest.raises(httpx.HTTPStatusError):
        await client.fetch_prices_page(["ethereum"], "usd", page=1)
    await client.close()


@pytest.mark.asyncio
async def test_api_key_selects_pro_endpoint():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "pro-api.coingecko.com"
        assert request.headers["x-cg-pro-api-key"] == "secret"
        return httpx.Response(200, json=[])

    client = make_client(handler, api_key="secret")
    assert await client.fetch_supported_tickers() == []
    await client.close()
