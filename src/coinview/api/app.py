"""FastAPI application factory for the market-data query surface."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from coinview.api.routes import api, pages, sitemap
from coinview.config import MarketDataSettings, ServerSettings
from coinview.market_data.client import MarketDataClient


def create_app(
    market_data: MarketDataClient,
    settings: MarketDataSettings | None = None,
    lifespan: Any = None,
    server: ServerSettings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        market_data: Client shared by all route handlers (stateless per request).
        settings: Market data settings; list limits are read from here.
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to close upstream connections on shutdown.
        server: Server settings; the sitemap reads its public base URL here.

    Returns:
        Configured FastAPI application with JSON API, page-data and sitemap routes.
    """
    app = FastAPI(
        title="coinview",
        lifespan=lifespan,
    )

    app.state.market_data = market_data
    app.state.market_settings = settings or MarketDataSettings()
    app.state.server_settings = server or ServerSettings()

    app.include_router(api.router, prefix="/api")
    app.include_router(pages.router, prefix="/pages")
    app.include_router(sitemap.router)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
