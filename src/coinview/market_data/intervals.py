"""History interval table and trading-pair construction.

Each chart interval maps to a fixed candle width and sample count, e.g. the
"1W" chart is 42 four-hour candles. Candle widths are expressed both in
milliseconds (for spacing synthetic points) and as Binance kline codes.
"""

from dataclasses import dataclass

from coinview.exceptions import UnsupportedIntervalError

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

DEFAULT_INTERVAL = "1D"


@dataclass(frozen=True)
class IntervalSpec:
    """Candle parameters for one chart interval."""

    label: str
    width_ms: int
    kline_code: str
    count: int


INTERVALS: dict[str, IntervalSpec] = {
    "1H": IntervalSpec("1H", MINUTE_MS, "1m", 60),
    "1D": IntervalSpec("1D", HOUR_MS, "1h", 24),
    "1W": IntervalSpec("1W", 4 * HOUR_MS, "4h", 42),
    "1M": IntervalSpec("1M", DAY_MS, "1d", 30),
    "1Y": IntervalSpec("1Y", WEEK_MS, "1w", 52),
}

# Labels from the older CoinCap-style vocabulary: "h1" was hourly points over
# a day, "d1" daily points over a month.
_LEGACY_ALIASES: dict[str, str] = {
    "h1": "1D",
    "d1": "1M",
}


def resolve_interval(label: str | None) -> IntervalSpec:
    """Return the IntervalSpec for a label, defaulting to 1D when empty.

    Canonical labels match exactly: "1m" and "1h" are Binance kline codes
    (one minute, one hour), so lower-cased labels are rejected rather than
    read as "1M" or "1H". The legacy "h1"/"d1" labels are lower-case only.
    Raises UnsupportedIntervalError otherwise.
    """
    if label is None or not label.strip():
        return INTERVALS[DEFAULT_INTERVAL]

    key = label.strip()
    alias = _LEGACY_ALIASES.get(key)
    if alias is not None:
        return INTERVALS[alias]

    spec = INTERVALS.get(key)
    if spec is None:
        raise UnsupportedIntervalError(label)
    return spec


def trading_pair(symbol: str, quote: str = "USDT", stable_quote: str = "DAI") -> str:
    """Build the exchange pair for a coin symbol, e.g. "btc" -> "BTCUSDT".

    The quote stablecoin cannot be quoted in itself, so it is paired against
    stable_quote instead ("USDT" -> "USDTDAI").
    """
    base = symbol.strip().upper()
    quote = quote.upper()
    if base == quote:
        return base + stable_quote.upper()
    return base + quote
