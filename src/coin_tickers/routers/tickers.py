"""Wallet token price and chart routes (CoinGecko)."""
import logging

from fastapi import APIRouter, Query

from coin_tickers.deps import (ErrorMapperDep, TickerRegistryDep,
                               TickersFetcherDep)
from coin_tickers.providers.core import TickersError
from coin_tickers.schemas import (AssetKey, ChartHistory, ChartHistoryPeriod,
                                  PricedAsset, PricesRequest, RequestedAsset)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tickers", tags=["tickers"])


@router.post("/prices", response_model=list[PricedAsset])
async def fetch_prices(
    body: PricesRequest,
    fetcher: TickersFetcherDep,
    error_mapper: ErrorMapperDep,
) -> list[PricedAsset]:
    """Get USD prices for wallet tokens.

    Tokens CoinGecko does not know are left out of the response. Responds 409
    while another price fetch is running.
    """
    tokens_by_chain: dict[int, list[RequestedAsset]] = {}
    for token in body.tokens:
        tokens_by_chain.setdefault(token.chain_id, []).append(token.to_requested())
    requested = {
        asset.key for assets in tokens_by_chain.values() for asset in assets
    }
    try:
        tickers = await fetcher.fetch_prices(tokens_by_chain)
    except TickersError as e:
        error_mapper.raise_http(e)
    return [
        PricedAsset(address=key.address, chain_id=key.chain_id, ticker=ticker)
        for key, ticker in tickers.items()
        if key in requested
    ]


@router.get("/{chain_id}/{address}/history", response_model=ChartHistory)
async def fetch_chart_history(
    chain_id: int,
    address: str,
    fetcher: TickersFetcherDep,
    error_mapper: ErrorMapperDep,
    period: ChartHistoryPeriod = Query(default=ChartHistoryPeriod.DAY),
    force: bool = Query(default=False, description="Bypass the chart cache"),
) -> ChartHistory:
    """Get the price chart of an already priced asset for one period."""
    key = AssetKey(address=address, chain_id=chain_id)
    try:
        return await fetcher.fetch_chart_history(key, period, force=force)
    except TickersError as e:
        error_mapper.raise_http(e, symbol=f"{key.address} on {chain_id}")


@router.get("/{chain_id}/{address}/histories", response_model=list[ChartHistory])
async def fetch_chart_histories(
    chain_id: int,
    address: str,
    fetcher: TickersFetcherDep,
    error_mapper: ErrorMapperDep,
) -> list[ChartHistory]:
    """Get day, week, month, three-month and year charts of an already priced asset."""
    key = AssetKey(address=address, chain_id=chain_id)
    try:
        return await fetcher.fetch_chart_histories(key)
    except TickersError as e:
        error_mapper.raise_http(e, symbol=f"{key.address} on {chain_id}")


@router.post("/catalog/refresh")
async def refresh_catalog(registry: TickerRegistryDep) -> dict[str, str | int]:
    """Reload the CoinGecko ticker catalog."""
    catalog = await registry.refresh()
    logger.info("Catalog refreshed via API: %d entries", len(catalog))
    return {"status": "refreshed", "count": len(catalog)}
