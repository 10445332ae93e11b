"""Pure translations from upstream record shapes to canonical records.

One function per upstream shape. Each is total over well-formed input and
raises MalformedResponseError for anything else, so the client can treat a
bad record the same as a bad response.

Upstream shapes:
- CoinLore ticker:   {"nameid": "bitcoin", "rank": 1, "price_usd": "42000.5",
                      "csupply": "19000000.00", "msupply": "21000000", ...}
- CoinCap asset:     {"id": "bitcoin", "rank": "1", "priceUsd": "42000.5",
                      "maxSupply": "21000000", ...}  (already canonical names)
- Binance kline:     [openTime, open, high, low, close, volume, closeTime, ...]
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from coinview.exceptions import MalformedResponseError
from coinview.models import Coin, CoinHistory


def to_decimal_str(value: Any, field: str = "value") -> str:
    """Normalise a numeric upstream value to a plain finite decimal string.

    Accepts str, int and float (floats go through str() first so the printed
    value is kept, not the binary expansion). Empty/None becomes "0".
    """
    if value is None or value == "":
        return "0"
    if isinstance(value, bool):
        raise MalformedResponseError(f"{field}: boolean is not a number")
    try:
        dec = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise MalformedResponseError(f"{field}: not a decimal: {value!r}") from e
    if not dec.is_finite():
        raise MalformedResponseError(f"{field}: not finite: {value!r}")
    # Plain notation, no exponent ("1E+3" -> "1000")
    return format(dec, "f")


def _optional_supply(value: Any, field: str) -> str | None:
    """Empty, null or zero max supply means the asset is uncapped."""
    if value is None or value == "":
        return None
    text = to_decimal_str(value, field)
    if Decimal(text) == 0:
        return None
    return text


def _require(record: dict, *keys: str) -> None:
    if not isinstance(record, dict):
        raise MalformedResponseError(f"expected object, got {type(record).__name__}")
    missing = [k for k in keys if record.get(k) in (None, "")]
    if missing:
        raise MalformedResponseError(f"missing fields: {', '.join(missing)}")


def _rank_str(value: Any) -> str:
    try:
        return str(int(str(value).strip()))
    except ValueError as e:
        raise MalformedResponseError(f"rank: not an integer: {value!r}") from e


def coin_from_coinlore(record: dict) -> Coin:
    """Map a CoinLore /tickers entry. CoinLore has no VWAP, so the price stands in."""
    _require(record, "nameid", "symbol", "name", "price_usd")
    price = to_decimal_str(record["price_usd"], "price_usd")
    return Coin(
        id=str(record["nameid"]).strip().lower(),
        rank=_rank_str(record.get("rank", 0)),
        symbol=str(record["symbol"]).upper(),
        name=str(record["name"]),
        supply=to_decimal_str(record.get("csupply"), "csupply"),
        max_supply=_optional_supply(record.get("msupply"), "msupply"),
        market_cap_usd=to_decimal_str(record.get("market_cap_usd"), "market_cap_usd"),
        volume_usd_24hr=to_decimal_str(record.get("volume24"), "volume24"),
        price_usd=price,
        change_percent_24hr=to_decimal_str(
            record.get("percent_change_24h"), "percent_change_24h"
        ),
        vwap_24hr=price,
        explorer=None,
    )


def coin_from_coincap(record: dict) -> Coin:
    """Map a CoinCap /assets entry."""
    _require(record, "id", "symbol", "name", "priceUsd")
    return Coin(
        id=str(record["id"]).strip().lower(),
        rank=_rank_str(record.get("rank", 0)),
        symbol=str(record["symbol"]).upper(),
        name=str(record["name"]),
        supply=to_decimal_str(record.get("supply"), "supply"),
        max_supply=_optional_supply(record.get("maxSupply"), "maxSupply"),
        market_cap_usd=to_decimal_str(record.get("marketCapUsd"), "marketCapUsd"),
        volume_usd_24hr=to_decimal_str(record.get("volumeUsd24Hr"), "volumeUsd24Hr"),
        price_usd=to_decimal_str(record["priceUsd"], "priceUsd"),
        change_percent_24hr=to_decimal_str(
            record.get("changePercent24Hr"), "changePercent24Hr"
        ),
        vwap_24hr=to_decimal_str(record.get("vwap24Hr"), "vwap24Hr"),
        explorer=record.get("explorer") or None,
    )


def history_from_kline(kline: list) -> CoinHistory:
    """Map a kline tuple to a history point: open time and close price only."""
    if not isinstance(kline, (list, tuple)) or len(kline) < 5:
        raise MalformedResponseError(f"kline: expected >= 5 columns, got {kline!r}")
    open_time = kline[0]
    if isinstance(open_time, bool):
        raise MalformedResponseError("kline open time: boolean")
    try:
        time_ms = int(open_time)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"kline open time: {open_time!r}") from e
    return CoinHistory.at(time_ms, to_decimal_str(kline[4], "close"))
