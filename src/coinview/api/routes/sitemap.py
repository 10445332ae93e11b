"""XML sitemap: the home page plus one detail page per listed coin."""

from __future__ import annotations

from xml.etree import ElementTree

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import Response

from coinview.config import MarketDataSettings, ServerSettings
from coinview.market_data.client import MarketDataClient

log = structlog.get_logger(__name__)

router = APIRouter()

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def build_sitemap(base_url: str, coin_ids: list[str]) -> bytes:
    """Render a urlset with the home page first, then /coin/{id} in the given order."""
    base = base_url.rstrip("/")
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)

    entries = [(base, "1.0")] + [(f"{base}/coin/{coin_id}", "0.8") for coin_id in coin_ids]
    for loc, priority in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = loc
        ElementTree.SubElement(url, "changefreq").text = "hourly"
        ElementTree.SubElement(url, "priority").text = priority

    return ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True)


@router.get("/sitemap.xml")
async def sitemap(request: Request) -> Response:
    """Sitemap over the listing window; served from fallback coins when offline."""
    settings: MarketDataSettings = request.app.state.market_settings
    server: ServerSettings = request.app.state.server_settings
    market_data: MarketDataClient = request.app.state.market_data

    coins = await market_data.list_coins(settings.search_window)
    log.debug("sitemap_built", coins=len(coins))
    return Response(
        content=build_sitemap(server.public_base_url, [c.id for c in coins]),
        media_type="application/xml",
    )
