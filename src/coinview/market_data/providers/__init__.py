"""Upstream provider adapters -- CoinLore/CoinCap listings, Binance candles."""

from coinview.config import MarketDataSettings
from coinview.market_data.providers.base import CandleProvider, ListingProvider
from coinview.market_data.providers.binance import BinanceCandleProvider
from coinview.market_data.providers.coincap import CoinCapProvider
from coinview.market_data.providers.coinlore import CoinLoreProvider


def build_listing_provider(settings: MarketDataSettings) -> ListingProvider:
    """Create the listing provider selected by MARKET_LISTING_PROVIDER."""
    if settings.listing_provider == "coincap":
        return CoinCapProvider(
            base_url=settings.coincap_url,
            timeout=settings.request_timeout,
            api_key=settings.coincap_api_key.get_secret_value() or None,
        )
    return CoinLoreProvider(
        base_url=settings.coinlore_url, timeout=settings.request_timeout
    )


def build_candle_provider(settings: MarketDataSettings) -> CandleProvider:
    return BinanceCandleProvider(
        base_url=settings.binance_url, timeout=settings.request_timeout
    )


__all__ = [
    "BinanceCandleProvider",
    "CandleProvider",
    "CoinCapProvider",
    "CoinLoreProvider",
    "ListingProvider",
    "build_candle_provider",
    "build_listing_provider",
]
