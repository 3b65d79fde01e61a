"""Helpers for interacting with the public CoinGecko API."""

from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from crypto_intel.config.settings import get_settings
from crypto_intel.schemas.market import CoinSnapshot
from crypto_intel.services.upstream import get_json


PRICE_CHANGE_WINDOWS = ("1h", "24h", "7d", "30d", "1y")

_COIN_LIST = TypeAdapter(list[CoinSnapshot])


async def fetch_raw_market_data(
    client: Optional[httpx.AsyncClient] = None,
    vs_currency: Optional[str] = None,
    order: str = "market_cap_desc",
    per_page: Optional[int] = None,
    page: int = 1,
    sparkline: bool = False,
) -> Any:
    """Return the decoded CoinGecko ``/coins/markets`` body.

    The body is returned unvalidated; deciding whether it is a usable coin list
    is the caller's job. Raises ``UpstreamError`` on any transport, status or
    JSON failure.
    """

    settings = get_settings()
    params = {
        "vs_currency": vs_currency or settings.MARKET_VS_CURRENCY,
        "order": order,
        "per_page": per_page or settings.MARKET_PER_PAGE,
        "page": page,
        "sparkline": str(sparkline).lower(),
        "price_change_percentage": ",".join(PRICE_CHANGE_WINDOWS),
    }

    return await get_json(
        "coingecko",
        settings.MARKET_DATA_URL,
        params=params,
        client=client,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


def parse_market_payload(payload: Any) -> Optional[list[CoinSnapshot]]:
    """Validate a markets body as a list of coin snapshots.

    Returns ``None`` for anything that is not a list of conforming records; a
    single bad record rejects the whole payload.
    """

    if not isinstance(payload, list):
        return None
    try:
        return _COIN_LIST.validate_python(payload)
    except ValidationError:
        return None
