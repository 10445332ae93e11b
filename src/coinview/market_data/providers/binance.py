"""Binance kline source via ccxt async.

Uses ccxt's raw public endpoint (GET /api/v3/klines) rather than the unified
fetch_ohlcv: the raw call needs no market loading, takes the exchange pair id
directly ("BTCUSDT"), and returns prices as exchange-formatted decimal strings
instead of floats.
"""

import ccxt.async_support as ccxt_async
from ccxt.base.errors import BaseError as CcxtError

from coinview.exceptions import MalformedResponseError, ProviderError
from coinview.logging import get_logger
from coinview.market_data.providers.base import CandleProvider

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.binance.com/api"


class BinanceCandleProvider(CandleProvider):
    """Secondary (candle) provider wrapping ccxt.async_support.binance."""

    name = "binance"

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 5.0,
        exchange: ccxt_async.binance | None = None,
    ) -> None:
        if exchange is None:
            config: dict = {
                "enableRateLimit": True,
                "timeout": int(timeout * 1000),  # ccxt takes milliseconds
            }
            # Only the public spot API is used, so only that URL is overridden
            if base_url.rstrip("/") != DEFAULT_API_URL:
                config["urls"] = {"api": {"public": f"{base_url.rstrip('/')}/v3"}}
            exchange = ccxt_async.binance(config)
        self._exchange = exchange

    @property
    def exchange(self) -> ccxt_async.binance:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def get_candles(self, pair: str, width: str, count: int) -> list[list]:
        try:
            klines = await self._exchange.public_get_klines(
                {"symbol": pair, "interval": width, "limit": count}
            )
        except CcxtError as e:
            raise ProviderError(f"binance klines failed for {pair}: {e}") from e

        if not isinstance(klines, list):
            raise MalformedResponseError(
                f"binance klines for {pair}: expected list, got {type(klines).__name__}"
            )
        logger.debug("binance_klines_fetched", pair=pair, width=width, count=len(klines))
        return klines

    async def close(self) -> None:
        """Clean up ccxt async resources; must be called to avoid leaked sessions."""
        await self._exchange.close()
