"""Catalog of CoinGecko tickers and resolution of wallet tokens to ticker ids."""
import asyncio
import logging
from collections.abc import Iterable

from coin_tickers.chains import platform_for_chain
from coin_tickers.providers.core.protocols import ProviderClient
from coin_tickers.providers.core.retry import DEFAULT_ATTEMPTS, retry_or_default
from coin_tickers.schemas import CatalogEntry, MappedTickerId, RequestedAsset
from coin_tickers.utils import is_null_address

logger = logging.getLogger(__name__)


def entry_matches(entry: CatalogEntry, asset: RequestedAsset) -> bool:
    """Whether a catalog entry is the coin for a wallet token.

    If the entry lists a contract on the token's platform, the contract decides
    (a null contract means "native coin", matched by symbol). Otherwise, and for
    chains CoinGecko has no platform for, the symbol decides.
    """
    platform = platform_for_chain(asset.key.chain_id)
    if platform is not None and platform in entry.platforms:
        contract = entry.platforms[platform]
        if is_null_address(contract):
            return entry.symbol.lower() == asset.symbol.lower()
        return contract == asset.key.address
    return entry.symbol.lower() == asset.symbol.lower()


def resolve(asset: RequestedAsset, catalog: Iterable[CatalogEntry]) -> str | None:
    """Return the id of the first catalog entry matching the asset."""
    for entry in catalog:
        if entry_matches(entry, asset):
            return entry.id
    return None


class TickerIdRegistry:
    """Process-wide catalog of tickers CoinGecko can price.

    Created once at startup and shared by every CoinTickersFetcher. The catalog
    is loaded on first use; concurrent callers share the in-flight load. After a
    successful load it is kept until refresh() is called, and a failed refresh
    keeps it. If the first load fails on every attempt, callers get an empty
    catalog and the next call tries again.
    """

    def __init__(
        self,
        client: ProviderClient,
        *,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        """Initialize the registry.

        Args:
            client: Provider used to fetch the catalog.
            attempts: Attempts per load (initial + retries).
        """
        self._client = client
        self._attempts = attempts
        self._load: asyncio.Future[list[CatalogEntry]] | None = None
        self._catalog: list[CatalogEntry] | None = None

    async def get_catalog(self) -> list[CatalogEntry]:
        """Return the catalog, loading it if needed. Never raises provider errors."""
        if self._load is None:
            self._load = asyncio.ensure_future(self._fetch_catalog())
        # Shielded so one caller giving up does not cancel the shared load.
        return await asyncio.shield(self._load)

    async def refresh(self) -> list[CatalogEntry]:
        """Reload the catalog and replace it wholesale.

        If the reload fails, the last good catalog stays in use.
        """
        self._load = asyncio.ensure_future(self._fetch_catalog())
        return await asyncio.shield(self._load)

    async def _fetch_catalog(self) -> list[CatalogEntry]:
        failed = False

        def on_exhausted() -> list[CatalogEntry]:
            nonlocal failed
            failed = True
            return []

        catalog = await retry_or_default(
            self._client.fetch_supported_tickers,
            on_exhausted,
            description="supported tickers",
            attempts=self._attempts,
        )
        if not failed:
            self._catalog = catalog
            logger.info("Loaded ticker catalog with %d entries", len(catalog))
            return catalog
        if self._catalog is not None:
            logger.warning(
                "Keeping previous ticker catalog with %d entries", len(self._catalog)
            )
            return self._catalog
        # A newer load may have replaced this one while it was retrying.
        if self._load is asyncio.current_task():
            self._load = None
        return catalog

    async def map_tokens(self, assets: Iterable[RequestedAsset]) -> list[MappedTickerId]:
        """Resolve assets to ticker ids against the catalog, dropping unmatched ones."""
        catalog = await self.get_catalog()
        return map_tokens(assets, catalog)


def map_tokens(
    assets: Iterable[RequestedAsset], catalog: list[CatalogEntry]
) -> list[MappedTickerId]:
    """Resolve each asset against the catalog; unmatched assets are dropped."""
    mapped: list[MappedTickerId] = []
    for asset in assets:
        ticker_id = resolve(asset, catalog)
        if ticker_id is None:
            logger.debug("No ticker for %s on chain %d", asset.symbol, asset.key.chain_id)
            continue
        mapped.append(MappedTickerId(ticker_id=ticker_id, key=asset.key))
    return mapped
