"""Fail-soft market data client.

Orchestrates the listing provider (ranked coins) and the candle provider
(price history). Every upstream call is a bounded-timeout attempt; any
failure -- network, timeout, non-2xx, malformed payload -- is logged and
replaced by data from the FallbackDataset. Callers always get canonically
shaped data or an explicit None, never an upstream exception.

Usage:
    client = MarketDataClient.from_settings(settings.market)
    coins = await client.list_coins(50)
    history = await client.get_history("bitcoin", "1W")
    await client.close()
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from coinview.config import MarketDataSettings
from coinview.exceptions import MalformedResponseError
from coinview.logging import get_logger
from coinview.market_data.fallback import FallbackDataset
from coinview.market_data.intervals import IntervalSpec, resolve_interval, trading_pair
from coinview.market_data.mapper import history_from_kline
from coinview.market_data.providers import build_candle_provider, build_listing_provider
from coinview.market_data.providers.base import CandleProvider, ListingProvider
from coinview.models import Coin, CoinHistory

logger = get_logger(__name__)

T = TypeVar("T")


class MarketDataClient:
    """Canonical Coin / CoinHistory access regardless of upstream health.

    Args:
        listing: Ranked-listing provider (primary).
        candles: Candle provider (secondary).
        fallback: Substitute dataset; defaults to the built-in three coins.
        timeout: Seconds allowed per upstream call.
        search_window: Top-N coins searched by get_coin_by_id.
        quote_currency: Quote asset for candle pairs.
        stable_pair_quote: Quote used when the coin is the quote asset itself.
        retry_attempts: Extra attempts after the first (0 = single attempt).
        retry_jitter: Max random delay in seconds before each retry.
        rng: Random source for synthetic history and jitter.
    """

    def __init__(
        self,
        listing: ListingProvider,
        candles: CandleProvider,
        fallback: FallbackDataset | None = None,
        *,
        timeout: float = 5.0,
        search_window: int = 100,
        quote_currency: str = "USDT",
        stable_pair_quote: str = "DAI",
        retry_attempts: int = 0,
        retry_jitter: float = 0.25,
        rng: random.Random | None = None,
    ) -> None:
        self._listing = listing
        self._candles = candles
        self._fallback = fallback if fallback is not None else FallbackDataset()
        self._timeout = timeout
        self._search_window = search_window
        self._quote = quote_currency
        self._stable_quote = stable_pair_quote
        self._retry_attempts = max(0, retry_attempts)
        self._retry_jitter = retry_jitter
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(
        cls, settings: MarketDataSettings, fallback: FallbackDataset | None = None
    ) -> "MarketDataClient":
        """Build a client with the providers selected in settings."""
        return cls(
            listing=build_listing_provider(settings),
            candles=build_candle_provider(settings),
            fallback=fallback,
            timeout=settings.request_timeout,
            search_window=settings.search_window,
            quote_currency=settings.quote_currency,
            stable_pair_quote=settings.stable_pair_quote,
            retry_attempts=settings.retry_attempts,
            retry_jitter=settings.retry_jitter,
        )

    @property
    def fallback(self) -> FallbackDataset:
        return self._fallback

    # ──────────────────────────────────────────────
    # Public methods
    # ──────────────────────────────────────────────

    async def list_coins(self, limit: int) -> list[Coin]:
        """Return up to `limit` ranked coins, or the fallback prefix on any failure."""
        if limit <= 0:
            return []
        try:
            coins = await self._call(lambda: self._listing.list_top_ranked(limit))
            if not coins:
                raise MalformedResponseError("listing returned no coins")
            return coins[:limit]
        except Exception as e:
            logger.warning(
                "listing_fetch_failed",
                provider=self._listing.name,
                limit=limit,
                error=str(e) or type(e).__name__,
            )
            return self._fallback.head(limit)

    async def get_coin_by_id(self, coin_id: str) -> Coin | None:
        """Find a coin in the provider's top window, then in the fallback dataset.

        Returns None only if the id is in neither.
        """
        key = coin_id.strip().lower()
        if not key:
            return None

        for coin in await self._fetch_window():
            if coin.id == key:
                return coin

        coin = self._fallback.find(key)
        if coin is None:
            logger.info("coin_not_found", coin_id=key, window=self._search_window)
        return coin

    async def get_coins_by_ids(self, coin_ids: list[str]) -> list[Coin]:
        """Resolve ids in input order with one window fetch; unknown ids are omitted."""
        window = {coin.id: coin for coin in await self._fetch_window()}

        result: list[Coin] = []
        seen: set[str] = set()
        for raw_id in coin_ids:
            key = raw_id.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            coin = window.get(key) or self._fallback.find(key)
            if coin is not None:
                result.append(coin)
        return result

    async def get_history(
        self,
        coin_id: str,
        interval: str | IntervalSpec | None = None,
        *,
        coin: Coin | None = None,
    ) -> list[CoinHistory]:
        """Price history for a coin at one of the supported chart intervals.

        Pass `coin` when the caller already resolved it, to skip the listing
        lookup. Raises UnsupportedIntervalError for an unknown interval label
        (caller input). Every other failure yields synthetic history of the
        right shape.
        """
        spec = interval if isinstance(interval, IntervalSpec) else resolve_interval(interval)

        try:
            if coin is None:
                coin = await self.get_coin_by_id(coin_id)
            if coin is None:
                raise LookupError(f"no symbol for coin {coin_id!r}")

            pair = trading_pair(coin.symbol, self._quote, self._stable_quote)
            klines = await self._call(
                lambda: self._candles.get_candles(pair, spec.kline_code, spec.count)
            )
            history = [history_from_kline(k) for k in klines]
            _check_series(history, spec)
            return history
        except Exception as e:
            logger.warning(
                "history_fallback_used",
                coin_id=coin_id,
                interval=spec.label,
                provider=self._candles.name,
                error=str(e) or type(e).__name__,
            )
            return self._fallback.generate_history(coin_id, spec, rng=self._rng)

    async def close(self) -> None:
        """Release both providers' HTTP resources."""
        for provider in (self._listing, self._candles):
            try:
                await provider.close()
            except Exception as e:
                logger.warning("provider_close_failed", provider=provider.name, error=str(e))

    # ──────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────

    async def _fetch_window(self) -> list[Coin]:
        """Top `search_window` coins from the provider, or [] on any failure."""
        try:
            return await self._call(
                lambda: self._listing.list_top_ranked(self._search_window)
            )
        except Exception as e:
            logger.warning(
                "window_fetch_failed",
                provider=self._listing.name,
                window=self._search_window,
                error=str(e) or type(e).__name__,
            )
            return []

    async def _call(self, factory: Callable[[], Awaitable[T]]) -> T:
        """Run one upstream call under the timeout, retrying only if configured."""
        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(factory(), timeout=self._timeout)
            except Exception:
                if attempt >= self._retry_attempts:
                    raise
                attempt += 1
                await asyncio.sleep(self._rng.uniform(0, self._retry_jitter))
                logger.debug("upstream_retry", attempt=attempt)


def _check_series(history: list[CoinHistory], spec: IntervalSpec) -> None:
    """Reject candle series that are short, long, unordered or unevenly spaced."""
    if len(history) != spec.count:
        raise MalformedResponseError(
            f"expected {spec.count} candles for {spec.label}, got {len(history)}"
        )
    for prev, cur in zip(history, history[1:]):
        if cur.time - prev.time != spec.width_ms:
            raise MalformedResponseError(
                f"candle spacing {cur.time - prev.time}ms, expected {spec.width_ms}ms"
            )
