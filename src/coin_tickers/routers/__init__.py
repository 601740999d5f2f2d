"""API routers for wallet ticker endpoints.

Includes routes for:
- /tickers/prices - Bulk USD prices for wallet tokens
- /tickers/{chain_id}/{address}/history - One chart period for a priced asset
- /tickers/{chain_id}/{address}/histories - All chart periods for a priced asset
- /tickers/catalog/refresh - Reload the CoinGecko catalog
"""
from coin_tickers.routers.tickers import router as tickers_router

__all__ = ["tickers_router"]
