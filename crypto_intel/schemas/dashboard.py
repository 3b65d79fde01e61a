"""View models for the dashboard endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from crypto_intel.schemas.analyst import AnalystState
from crypto_intel.schemas.market import WatchlistEntry, WatchlistTab
from crypto_intel.schemas.news import NewsItem


class SelectionState(BaseModel):
    symbol: str
    tab: WatchlistTab
    search: str


class SelectionUpdate(BaseModel):
    """Partial update of the selection cursor. Unset fields keep their value."""

    symbol: Optional[str] = None
    coin_id: Optional[str] = Field(default=None, description="Select a coin; sets symbol to <SYMBOL>USDT")
    tab: Optional[WatchlistTab] = None
    search: Optional[str] = None

    @field_validator("symbol")
    @classmethod
    def symbol_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be blank")
        return value


class ChartConfig(BaseModel):
    """Settings handed to the embedded TradingView advanced chart."""

    symbol: str
    theme: str = "dark"
    autosize: bool = True
    interval: str = "1"
    timezone: str = "Etc/UTC"
    style: str = "1"
    locale: str = "en"
    enable_publishing: bool = False
    allow_symbol_change: bool = True


class LocaleState(BaseModel):
    locale: str
    strings: Dict[str, str]


class LocaleUpdate(BaseModel):
    locale: str


class DashboardView(BaseModel):
    selection: SelectionState
    chart: ChartConfig
    watchlist: List[WatchlistEntry]
    coins_total: int
    alerts: List[NewsItem]
    ticker: List[NewsItem]
    analyst: AnalystState
    locale: LocaleState
    last_refresh: Optional[datetime] = None
