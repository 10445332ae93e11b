"""Page data loaders: the JSON a front end needs to render each page."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from coinview.api.routes.api import parse_ids
from coinview.config import MarketDataSettings
from coinview.exceptions import UnsupportedIntervalError
from coinview.logging import request_context
from coinview.market_data.client import MarketDataClient
from coinview.market_data.intervals import DEFAULT_INTERVAL, resolve_interval

log = structlog.get_logger(__name__)

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@router.get("/home")
async def home_page(request: Request, limit: int | None = None) -> JSONResponse:
    """Ranked coin list for the home page. Limit is clamped to 1..list_limit_max."""
    settings: MarketDataSettings = request.app.state.market_settings
    market_data: MarketDataClient = request.app.state.market_data

    if limit is None:
        limit = settings.list_limit_default
    limit = max(1, min(limit, settings.list_limit_max))

    coins = await market_data.list_coins(limit)
    return JSONResponse(content={
        "coins": [c.to_dict() for c in coins],
        "lastUpdated": _now_iso(),
    })


@router.get("/coin/{coin_id}")
async def coin_page(
    request: Request, coin_id: str, interval: str = DEFAULT_INTERVAL
) -> JSONResponse:
    """Coin detail plus its chart. The coin is resolved once and reused for history."""
    market_data: MarketDataClient = request.app.state.market_data
    try:
        spec = resolve_interval(interval)
    except UnsupportedIntervalError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)

    with request_context(page="coin", coin_id=coin_id, interval=spec.label):
        coin = await market_data.get_coin_by_id(coin_id)
        if coin is None:
            log.info("coin_page_not_found", coin_id=coin_id)
            return JSONResponse(content={"error": "Coin not found"}, status_code=404)
        history = await market_data.get_history(coin_id, spec, coin=coin)

    return JSONResponse(content={
        "coin": coin.to_dict(),
        "history": [p.to_dict() for p in history],
        "interval": spec.label,
        "lastUpdated": _now_iso(),
    })


@router.get("/watchlist")
async def watchlist_page(request: Request, ids: str | None = None) -> JSONResponse:
    """Coins for the ids a client keeps in its local watchlist; empty list if none."""
    id_list = parse_ids(ids)
    if not id_list:
        return JSONResponse(content={"coins": []})

    market_data: MarketDataClient = request.app.state.market_data
    coins = await market_data.get_coins_by_ids(id_list)
    return JSONResponse(content={"coins": [c.to_dict() for c in coins]})
