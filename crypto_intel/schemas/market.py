"""Pydantic models for market-related payloads."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CoinSnapshot(BaseModel):
    """One CoinGecko market record for a single asset at fetch time."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    symbol: str
    name: str
    image: str = ""
    current_price: Optional[float] = None
    price_change_percentage_1h_in_currency: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    price_change_percentage_7d_in_currency: Optional[float] = None
    price_change_percentage_30d_in_currency: Optional[float] = None
    price_change_percentage_1y_in_currency: Optional[float] = None


class WatchlistTab(str, Enum):
    ALL = "all"
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"


class WatchlistEntry(BaseModel):
    coin: CoinSnapshot
    chart_symbol: str
    selected: bool


class RefreshResponse(BaseModel):
    ok: bool
    coins_updated: bool
    news_updated: bool
    coins: int
    alerts: int
    ticker: int
    duration_ms: int
    error: Optional[str] = None
