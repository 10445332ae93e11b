"""Canonical market-data records shared by every provider adapter.

All numeric market values are carried as decimal strings, never floats, so
arbitrary-precision upstream values survive untouched. Records are frozen:
they are built once per request and never mutated.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class Coin:
    """Market snapshot of a single coin."""

    id: str  # slug, e.g. "bitcoin"
    rank: str
    symbol: str
    name: str
    supply: str
    max_supply: str | None  # None means uncapped
    market_cap_usd: str
    volume_usd_24hr: str
    price_usd: str
    change_percent_24hr: str
    vwap_24hr: str
    explorer: str | None = None

    def to_dict(self) -> dict:
        """Serialize with the camelCase field names used on the wire."""
        return {
            "id": self.id,
            "rank": self.rank,
            "symbol": self.symbol,
            "name": self.name,
            "supply": self.supply,
            "maxSupply": self.max_supply,
            "marketCapUsd": self.market_cap_usd,
            "volumeUsd24Hr": self.volume_usd_24hr,
            "priceUsd": self.price_usd,
            "changePercent24Hr": self.change_percent_24hr,
            "vwap24Hr": self.vwap_24hr,
            "explorer": self.explorer,
        }


@dataclass(frozen=True)
class CoinHistory:
    """One price point of a history series (close price of a candle window)."""

    price_usd: str
    time: int  # Unix milliseconds, open time of the window
    date: str  # ISO-8601, derived from time

    @classmethod
    def at(cls, time_ms: int, price_usd: str) -> "CoinHistory":
        """Build a point, deriving the ISO date from the millisecond timestamp."""
        return cls(price_usd=price_usd, time=time_ms, date=ms_to_iso(time_ms))

    def to_dict(self) -> dict:
        return {"priceUsd": self.price_usd, "time": self.time, "date": self.date}


def ms_to_iso(time_ms: int) -> str:
    """Convert a millisecond timestamp to an ISO-8601 UTC string (e.g. '2024-01-01T00:00:00.000Z')."""
    dt = datetime.fromtimestamp(time_ms // 1000, tz=timezone.utc) + timedelta(
        milliseconds=time_ms % 1000
    )
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
