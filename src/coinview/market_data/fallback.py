"""Static substitute data served when upstream providers are unavailable.

FallbackDataset is an immutable value handed to MarketDataClient, so tests
and deployments can substitute their own coins. The history generator keeps
the shape of a real series (point count, spacing, monotonic timestamps)
while the prices themselves are a random walk.
"""

import random
import time
from dataclasses import dataclass, field

from coinview.market_data.intervals import IntervalSpec
from coinview.market_data.mapper import to_decimal_str
from coinview.models import Coin, CoinHistory

DEFAULT_FALLBACK_COINS: tuple[Coin, ...] = (
    Coin(
        id="bitcoin",
        rank="1",
        symbol="BTC",
        name="Bitcoin",
        supply="19000000",
        max_supply="21000000",
        market_cap_usd="800000000000",
        volume_usd_24hr="30000000000",
        price_usd="42000.50",
        change_percent_24hr="2.5",
        vwap_24hr="41500.00",
        explorer="https://blockchain.info/",
    ),
    Coin(
        id="ethereum",
        rank="2",
        symbol="ETH",
        name="Ethereum",
        supply="120000000",
        max_supply=None,
        market_cap_usd="350000000000",
        volume_usd_24hr="15000000000",
        price_usd="2900.25",
        change_percent_24hr="-1.2",
        vwap_24hr="2950.00",
        explorer="https://etherscan.io/",
    ),
    Coin(
        id="dogecoin",
        rank="10",
        symbol="DOGE",
        name="Dogecoin",
        supply="132000000000",
        max_supply=None,
        market_cap_usd="20000000000",
        volume_usd_24hr="1000000000",
        price_usd="0.15",
        change_percent_24hr="5.0",
        vwap_24hr="0.14",
        explorer="https://dogechain.info/",
    ),
)

# Coarse random-walk starting points
DEFAULT_BASE_PRICES: tuple[tuple[str, float], ...] = (
    ("bitcoin", 42000.0),
    ("ethereum", 2900.0),
)


@dataclass(frozen=True)
class FallbackDataset:
    """Fixed coin list plus per-id base prices for synthetic history.

    Args:
        coins: Ordered fallback coins; list_coins() returns a prefix of these.
        base_prices: (coin id, starting price) pairs for the random walk.
        default_base_price: Starting price for ids with no other source.
        max_step_pct: Largest per-point move, as a fraction (0.05 = 5%).
    """

    coins: tuple[Coin, ...] = DEFAULT_FALLBACK_COINS
    base_prices: tuple[tuple[str, float], ...] = DEFAULT_BASE_PRICES
    default_base_price: float = 0.15
    max_step_pct: float = 0.05
    _by_id: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {c.id.lower(): c for c in self.coins})

    def head(self, limit: int) -> list[Coin]:
        """First `limit` coins in fallback order."""
        if limit <= 0:
            return []
        return list(self.coins[:limit])

    def find(self, coin_id: str) -> Coin | None:
        return self._by_id.get(coin_id.strip().lower())

    def base_price(self, coin_id: str) -> float:
        """Starting price for synthetic history: explicit entry, then fallback coin, then default."""
        key = coin_id.strip().lower()
        for known_id, price in self.base_prices:
            if known_id == key:
                return price
        coin = self._by_id.get(key)
        if coin is not None:
            return float(coin.price_usd)
        return self.default_base_price

    def generate_history(
        self,
        coin_id: str,
        interval: IntervalSpec,
        now_ms: int | None = None,
        rng: random.Random | None = None,
    ) -> list[CoinHistory]:
        """Geometric random walk with `interval.count` points spaced `interval.width_ms` apart.

        The last point sits one step before now_ms. Only prices vary between
        calls; timestamps are fully determined by now_ms and the interval.
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        rng = rng or random.Random()

        count = interval.count
        step = interval.width_ms
        price = self.base_price(coin_id)

        history: list[CoinHistory] = []
        for i in range(count):
            price *= 1 + rng.uniform(-self.max_step_pct, self.max_step_pct)
            history.append(CoinHistory.at(now_ms - (count - i) * step, to_decimal_str(price)))
        return history
