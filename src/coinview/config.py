"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketDataSettings(BaseSettings):
    """Upstream market-data providers and fail-soft behaviour.

    All fields configurable via MARKET_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="MARKET_")

    listing_provider: Literal["coinlore", "coincap"] = "coinlore"
    coinlore_url: str = "https://api.coinlore.net/api"
    coincap_url: str = "https://api.coincap.io/v2"
    coincap_api_key: SecretStr = SecretStr("")
    binance_url: str = "https://api.binance.com/api"

    request_timeout: float = 5.0  # seconds, per upstream call
    search_window: int = 100  # top-N searched for by-id lookups
    list_limit_default: int = 50
    list_limit_max: int = 250

    quote_currency: str = "USDT"
    stable_pair_quote: str = "DAI"  # pairs the quote stablecoin itself, e.g. USDTDAI

    # Off by default: a single attempt, then fallback
    retry_attempts: int = 0
    retry_jitter: float = 0.25  # max seconds of random delay before a retry


class ServerSettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "0.0.0.0"
    port: int = 8000
    public_base_url: str = "http://localhost:8000"  # origin used for sitemap <loc> entries


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    market: MarketDataSettings = MarketDataSettings()
    server: ServerSettings = ServerSettings()
