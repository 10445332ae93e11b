"""Abstract market-data provider interfaces.

MarketDataClient depends only on these contracts, so adding an upstream
means writing a new adapter rather than touching the client. Adapters
return canonical records (or raw candle tuples) and raise ProviderError /
MalformedResponseError on failure; fallback policy lives in the client.
"""

from abc import ABC, abstractmethod

from coinview.models import Coin


class ListingProvider(ABC):
    """Ranked coin listing (ticker snapshots ordered by market-cap rank)."""

    name: str = "listing"

    @abstractmethod
    async def list_top_ranked(self, limit: int) -> list[Coin]:
        """Return up to `limit` coins in rank order, already mapped to Coin."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release HTTP resources."""
        ...


class CandleProvider(ABC):
    """Historical candle (kline) source."""

    name: str = "candles"

    @abstractmethod
    async def get_candles(self, pair: str, width: str, count: int) -> list[list]:
        """Fetch the latest `count` candles of `width` (e.g. "1h") for `pair`.

        Returns a list of [openTime, open, high, low, close, volume, ...]
        tuples, oldest first.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release HTTP resources."""
        ...
