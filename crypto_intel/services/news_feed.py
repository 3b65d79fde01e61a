"""Helpers for the CryptoCompare news endpoint."""

from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from crypto_intel.config.settings import get_settings
from crypto_intel.schemas.news import NewsItem
from crypto_intel.services.upstream import get_json


NEWS_ITEMS_FIELD = "Data"

_NEWS_LIST = TypeAdapter(list[NewsItem])


async def fetch_raw_news(
    client: Optional[httpx.AsyncClient] = None,
    lang: Optional[str] = None,
) -> Any:
    """Return the decoded news body (an object whose ``Data`` field holds the items)."""

    settings = get_settings()
    return await get_json(
        "cryptocompare",
        settings.NEWS_URL,
        params={"lang": lang or settings.NEWS_LANG},
        client=client,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


def parse_news_payload(payload: Any) -> Optional[list[NewsItem]]:
    """Pull the titled items out of a news body, or ``None`` if it has none."""

    if not isinstance(payload, dict):
        return None
    items = payload.get(NEWS_ITEMS_FIELD)
    if not isinstance(items, list):
        return None
    try:
        return _NEWS_LIST.validate_python(items)
    except ValidationError:
        return None
