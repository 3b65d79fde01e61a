from fastapi import APIRouter

from crypto_intel.schemas.news import NewsItem
from crypto_intel.services.state import get_store


router = APIRouter(prefix="/news", tags=["news"])


@router.get("/alerts", response_model=list[NewsItem])
async def get_alerts():
    return list(get_store().market.alerts)


@router.get("/ticker", response_model=list[NewsItem])
async def get_ticker():
    return list(get_store().market.ticker)
