"""Entry point for the coinview market-data service.

Wires settings, logging, the market data client and the FastAPI app, then
serves it with uvicorn's programmatic API. The lifespan closes the
upstream HTTP sessions (httpx and ccxt) on shutdown.
"""

import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from coinview.api.app import create_app
from coinview.config import AppSettings
from coinview.logging import get_logger, setup_logging
from coinview.market_data.client import MarketDataClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and release upstream connections on shutdown."""
    logger = get_logger("coinview.main")
    settings = app.state.market_settings
    logger.info(
        "lifespan_started",
        listing_provider=settings.listing_provider,
        timeout=settings.request_timeout,
    )

    yield

    await app.state.market_data.close()
    logger.info("coinview_stopped")


async def run() -> None:
    """Load settings, build components and serve until interrupted."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("coinview.main")

    market_data = MarketDataClient.from_settings(settings.market)
    app = create_app(market_data, settings.market, lifespan=lifespan, server=settings.server)

    logger.info(
        "starting_server",
        host=settings.server.host,
        port=settings.server.port,
    )

    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
