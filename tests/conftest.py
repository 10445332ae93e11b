"""Shared test fixtures for the coinview market-data service."""

import random
from unittest.mock import AsyncMock

import pytest

from coinview.config import MarketDataSettings
from coinview.market_data.client import MarketDataClient
from coinview.market_data.fallback import FallbackDataset
from coinview.market_data.intervals import INTERVALS
from tests.helpers import LIVE_COINS, make_klines

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def market_settings() -> MarketDataSettings:
    """MarketDataSettings with test defaults."""
    return MarketDataSettings(request_timeout=0.5, search_window=100)


@pytest.fixture
def mock_listing() -> AsyncMock:
    """Listing provider that returns the first `limit` LIVE_COINS."""
    listing = AsyncMock()
    listing.name = "mock-listing"
    listing.list_top_ranked = AsyncMock(side_effect=lambda limit: LIVE_COINS[:limit])
    return listing


@pytest.fixture
def mock_candles() -> AsyncMock:
    """Candle provider that returns a well-formed series for any request."""
    widths = {spec.kline_code: spec.width_ms for spec in INTERVALS.values()}

    candles = AsyncMock()
    candles.name = "mock-candles"
    candles.get_candles = AsyncMock(
        side_effect=lambda pair, width, count: make_klines(count, widths[width])
    )
    return candles


@pytest.fixture
def failing_listing() -> AsyncMock:
    """Listing provider whose every call raises a network-style error."""
    listing = AsyncMock()
    listing.name = "failing-listing"
    listing.list_top_ranked = AsyncMock(side_effect=ConnectionError("unreachable"))
    return listing


@pytest.fixture
def failing_candles() -> AsyncMock:
    candles = AsyncMock()
    candles.name = "failing-candles"
    candles.get_candles = AsyncMock(side_effect=ConnectionError("unreachable"))
    return candles


@pytest.fixture
def client(mock_listing: AsyncMock, mock_candles: AsyncMock) -> MarketDataClient:
    """MarketDataClient over healthy mocked providers."""
    return MarketDataClient(
        mock_listing, mock_candles, FallbackDataset(), timeout=0.5, rng=random.Random(7)
    )


@pytest.fixture
def offline_client(
    failing_listing: AsyncMock, failing_candles: AsyncMock
) -> MarketDataClient:
    """MarketDataClient whose upstreams are all unreachable."""
    return MarketDataClient(
        failing_listing,
        failing_candles,
        FallbackDataset(),
        timeout=0.5,
        rng=random.Random(7),
    )
