"""Market data layer -- provider adapters, record mapping, and fail-soft fallback."""

from coinview.market_data.client import MarketDataClient
from coinview.market_data.fallback import FallbackDataset
from coinview.market_data.intervals import INTERVALS, IntervalSpec, resolve_interval

__all__ = [
    "INTERVALS",
    "FallbackDataset",
    "IntervalSpec",
    "MarketDataClient",
    "resolve_interval",
]
