"""CoinCap asset listing via httpx.

CoinCap's /assets records already use the canonical field names, so the
mapper only normalises numbers and nulls.
"""

import httpx

from coinview.exceptions import MalformedResponseError, ProviderError
from coinview.logging import get_logger
from coinview.market_data.mapper import coin_from_coincap
from coinview.market_data.providers.base import ListingProvider
from coinview.models import Coin

logger = get_logger(__name__)

MAX_LIMIT = 2000


class CoinCapProvider(ListingProvider):
    """Alternative listing provider backed by CoinCap /v2/assets.

    Args:
        base_url: API root, e.g. "https://api.coincap.io/v2".
        timeout: httpx timeout in seconds.
        api_key: Optional bearer token for higher rate limits.
        client: Pre-built httpx client (tests inject a MockTransport here).
    """

    name = "coincap"

    def __init__(
        self,
        base_url: str = "https://api.coincap.io/v2",
        timeout: float = 5.0,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {"Accept": "application/json", "User-Agent": "coinview/1.0"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers
        )

    async def list_top_ranked(self, limit: int) -> list[Coin]:
        try:
            resp = await self._client.get(
                "/assets", params={"limit": min(limit, MAX_LIMIT)}
            )
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"coincap request failed: {e}") from e
        except ValueError as e:
            raise MalformedResponseError("coincap returned invalid JSON") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise MalformedResponseError("coincap response has no 'data' list")

        coins = [coin_from_coincap(record) for record in data[:limit]]
        logger.debug("coincap_listing_fetched", requested=limit, count=len(coins))
        return coins

    async def close(self) -> None:
        await self._client.aclose()
