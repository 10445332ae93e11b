"""CoinLore ranked ticker listing via httpx.

CoinLore has no by-id lookup and serves at most 100 tickers per request,
so listings are fetched page by page with start/limit.
"""

import httpx

from coinview.exceptions import MalformedResponseError, ProviderError
from coinview.logging import get_logger
from coinview.market_data.mapper import coin_from_coinlore
from coinview.market_data.providers.base import ListingProvider
from coinview.models import Coin

logger = get_logger(__name__)

PAGE_SIZE = 100


class CoinLoreProvider(ListingProvider):
    """Primary listing provider backed by https://api.coinlore.net/api/tickers/."""

    name = "coinlore"

    def __init__(
        self,
        base_url: str = "https://api.coinlore.net/api",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": "coinview/1.0"},
        )

    async def list_top_ranked(self, limit: int) -> list[Coin]:
        coins: list[Coin] = []
        start = 0
        while len(coins) < limit:
            page_limit = min(PAGE_SIZE, limit - len(coins))
            page = await self._fetch_page(start, page_limit)
            coins.extend(coin_from_coinlore(record) for record in page)
            if len(page) < page_limit:
                break
            start += page_limit
        logger.debug("coinlore_listing_fetched", requested=limit, count=len(coins))
        return coins[:limit]

    async def _fetch_page(self, start: int, limit: int) -> list[dict]:
        try:
            resp = await self._client.get(
                "/tickers/", params={"start": start, "limit": limit}
            )
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"coinlore request failed: {e}") from e
        except ValueError as e:
            raise MalformedResponseError("coinlore returned invalid JSON") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise MalformedResponseError("coinlore response has no 'data' list")
        return data

    async def close(self) -> None:
        await self._client.aclose()
