# crypto_intel/services/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from crypto_intel.config.locales import normalize_locale
from crypto_intel.config.settings import get_settings
from crypto_intel.schemas.market import CoinSnapshot, WatchlistTab
from crypto_intel.schemas.news import NewsItem


# ----------------------------
# state cells
# ----------------------------
# Each cell has exactly one writer:
#   MarketState   -> refresh pipeline
#   AnalystSlot   -> analyst dispatcher
#   Selection     -> selection / locale API handlers
# Writers swap whole values; readers never see a half-applied tick.
@dataclass
class MarketState:
    coins: tuple[CoinSnapshot, ...] = ()
    news: tuple[NewsItem, ...] = ()
    alerts: tuple[NewsItem, ...] = ()
    ticker: tuple[NewsItem, ...] = ()
    last_refresh: Optional[datetime] = None
    applied_tick: int = 0


@dataclass
class AnalystSlot:
    question: str = ""
    response: str = ""
    pending: bool = False


@dataclass
class Selection:
    symbol: str = "BTCUSDT"
    tab: WatchlistTab = WatchlistTab.ALL
    search: str = ""
    locale: str = "id"


@dataclass
class DashboardStore:
    market: MarketState = field(default_factory=MarketState)
    analyst: AnalystSlot = field(default_factory=AnalystSlot)
    selection: Selection = field(default_factory=Selection)
    issued_tick: int = 0

    @classmethod
    def from_settings(cls) -> "DashboardStore":
        s = get_settings()
        return cls(selection=Selection(symbol=s.DEFAULT_SYMBOL, locale=normalize_locale(s.DEFAULT_LOCALE)))

    def next_tick(self) -> int:
        """Ticket for a new refresh tick; later tickets win in apply_refresh."""
        self.issued_tick = max(self.issued_tick, self.market.applied_tick) + 1
        return self.issued_tick

    def apply_refresh(
        self,
        *,
        tick: int,
        at: datetime,
        coins: Optional[list[CoinSnapshot]],
        news: Optional[list[NewsItem]],
        alerts: Optional[list[NewsItem]],
        ticker: Optional[list[NewsItem]],
    ) -> bool:
        """Swap in one tick's results. ``None`` slots keep their previous value.

        Returns False (and writes nothing) when a newer tick already landed.
        """
        current = self.market
        if tick <= current.applied_tick:
            return False

        self.market = MarketState(
            coins=tuple(coins) if coins is not None else current.coins,
            news=tuple(news) if news is not None else current.news,
            alerts=tuple(alerts) if alerts is not None else current.alerts,
            ticker=tuple(ticker) if ticker is not None else current.ticker,
            last_refresh=at,
            applied_tick=tick,
        )
        return True


_store: DashboardStore | None = None


def get_store() -> DashboardStore:
    global _store
    if _store is None:
        _store = DashboardStore.from_settings()
    return _store


def reset_store() -> DashboardStore:
    global _store
    _store = DashboardStore.from_settings()
    return _store
