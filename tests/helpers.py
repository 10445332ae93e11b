"""Sample upstream payloads and record builders shared by the test suite."""

from coinview.models import Coin

# ---------------------------------------------------------------------------
# Sample upstream data (mimics CoinLore /api/tickers/ entries)
# ---------------------------------------------------------------------------

COINLORE_TICKERS = [
    {
        "id": "90",
        "symbol": "BTC",
        "name": "Bitcoin",
        "nameid": "bitcoin",
        "rank": 1,
        "price_usd": "67012.35",
        "percent_change_24h": "1.52",
        "percent_change_1h": "0.10",
        "percent_change_7d": "-2.31",
        "price_btc": "1.00",
        "market_cap_usd": "1321457830215.12",
        "volume24": 28456123456.78,
        "volume24a": 27456123456.78,
        "csupply": "19719387.00",
        "tsupply": "19719387",
        "msupply": "21000000",
    },
    {
        "id": "80",
        "symbol": "ETH",
        "name": "Ethereum",
        "nameid": "ethereum",
        "rank": 2,
        "price_usd": "3456.78",
        "percent_change_24h": "-0.84",
        "percent_change_1h": "0.02",
        "percent_change_7d": "4.10",
        "price_btc": "0.0516",
        "market_cap_usd": "415612345678.90",
        "volume24": 14123456789.01,
        "volume24a": 13123456789.01,
        "csupply": "120231234.00",
        "tsupply": "120231234",
        "msupply": "",
    },
    {
        "id": "518",
        "symbol": "USDT",
        "name": "Tether",
        "nameid": "tether",
        "rank": 3,
        "price_usd": "1.00",
        "percent_change_24h": "0.01",
        "percent_change_1h": "0.00",
        "percent_change_7d": "0.00",
        "price_btc": "0.0000149",
        "market_cap_usd": "112000000000.00",
        "volume24": 45000000000.0,
        "volume24a": 44000000000.0,
        "csupply": "112000000000.00",
        "tsupply": "112000000000",
        "msupply": "0",
    },
]


def make_coin(coin_id: str, symbol: str, rank: str = "1", price: str = "1.00") -> Coin:
    """Build a canonical Coin with plausible defaults for the remaining fields."""
    return Coin(
        id=coin_id,
        rank=rank,
        symbol=symbol,
        name=coin_id.capitalize(),
        supply="1000000",
        max_supply=None,
        market_cap_usd="1000000",
        volume_usd_24hr="50000",
        price_usd=price,
        change_percent_24hr="0.5",
        vwap_24hr=price,
    )


def make_klines(count: int, width_ms: int, start_ms: int = 1_700_000_000_000) -> list[list]:
    """Binance-style kline rows: [openTime, open, high, low, close, volume, closeTime, ...]."""
    rows = []
    for i in range(count):
        open_time = start_ms + i * width_ms
        close = f"{100 + i}.50000000"
        rows.append([
            open_time,
            "100.00000000",
            "110.00000000",
            "90.00000000",
            close,
            "12.34500000",
            open_time + width_ms - 1,
            "1234.5",
            42,
            "6.1",
            "610.2",
            "0",
        ])
    return rows


LIVE_COINS = [
    make_coin("bitcoin", "BTC", "1", "67012.35"),
    make_coin("ethereum", "ETH", "2", "3456.78"),
    make_coin("tether", "USDT", "3", "1.00"),
    make_coin("solana", "SOL", "4", "145.20"),
]

