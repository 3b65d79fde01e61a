from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter

from crypto_intel.jobs.refresh import get_pipeline
from crypto_intel.schemas.market import CoinSnapshot, RefreshResponse, WatchlistEntry, WatchlistTab
from crypto_intel.services.state import get_store
from crypto_intel.services.watchlist import watchlist_entries


router = APIRouter(prefix="/market", tags=["market"])


@router.get("/coins", response_model=list[CoinSnapshot])
async def get_coins():
    return list(get_store().market.coins)


@router.get("/watchlist", response_model=list[WatchlistEntry])
async def get_watchlist(
    tab: Optional[WatchlistTab] = None,
    search: Optional[str] = None,
):
    """
    Coins filtered by tab and search text.
    Missing params fall back to the stored selection.
    Example: /market/watchlist?tab=bullish&search=bit
    """
    store = get_store()
    sel = store.selection
    return watchlist_entries(
        store.market.coins,
        tab if tab is not None else sel.tab,
        search if search is not None else sel.search,
        sel.symbol,
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_now():
    # runs outside the scheduler; the periodic schedule is unaffected
    result = await get_pipeline().refresh()
    return RefreshResponse(**asdict(result))
