"""Main module for the wallet ticker service."""
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from coin_tickers.container import Container, init_container
from coin_tickers.routers import tickers_router

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app. A container is created at startup unless one is given."""

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Attach the container at startup; close the provider client on shutdown."""
        fastapi_app.state.container = (
            container if container is not None else init_container()
        )
        yield
        try:
            await fastapi_app.state.container.coingecko_client().close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing CoinGecko client: %s", exc)

    fastapi_app = FastAPI(
        title="Coin Tickers",
        description="Cached CoinGecko prices and charts for multi-chain wallet tokens",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(tickers_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    uvicorn.run(
        "coin_tickers.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8001")),
    )
