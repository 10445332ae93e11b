"""JSON query endpoints: coins by id list, and price history by coin id."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from coinview.exceptions import UnsupportedIntervalError
from coinview.logging import request_context
from coinview.market_data.client import MarketDataClient
from coinview.market_data.intervals import DEFAULT_INTERVAL

log = structlog.get_logger(__name__)

router = APIRouter()


def parse_ids(raw: str | None) -> list[str]:
    """Split a comma-separated id list, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("/coins")
async def get_coins(request: Request, ids: str | None = None) -> JSONResponse:
    """Coins matching a comma-separated id list, in input order; unknown ids omitted."""
    id_list = parse_ids(ids)
    if not id_list:
        return JSONResponse(
            content={"error": "Missing or invalid ids parameter"}, status_code=400
        )

    market_data: MarketDataClient = request.app.state.market_data
    try:
        coins = await market_data.get_coins_by_ids(id_list)
    except Exception:
        log.exception("coins_endpoint_error", ids=id_list)
        return JSONResponse(content={"error": "Failed to fetch coins"}, status_code=500)

    return JSONResponse(content={"coins": [c.to_dict() for c in coins]})


@router.get("/history")
async def get_history(
    request: Request, id: str | None = None, interval: str = DEFAULT_INTERVAL
) -> JSONResponse:
    """Price history for one coin at a chart interval (1H, 1D, 1W, 1M, 1Y)."""
    coin_id = (id or "").strip()
    if not coin_id:
        return JSONResponse(
            content={"error": "Missing or invalid id parameter"}, status_code=400
        )

    market_data: MarketDataClient = request.app.state.market_data
    try:
        with request_context(coin_id=coin_id, interval=interval):
            history = await market_data.get_history(coin_id, interval)
    except UnsupportedIntervalError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)
    except Exception:
        log.exception("history_endpoint_error", coin_id=coin_id, interval=interval)
        return JSONResponse(
            content={"error": "Failed to fetch history"}, status_code=500
        )

    return JSONResponse(content={"history": [p.to_dict() for p in history]})
