"""Watchlist filtering and chart-symbol helpers."""

from __future__ import annotations

from typing import Sequence

from crypto_intel.schemas.market import CoinSnapshot, WatchlistEntry, WatchlistTab


SIDEWAYS_BAND_PCT = 1.0
QUOTE_ASSET = "USDT"


def _matches_search(coin: CoinSnapshot, needle: str) -> bool:
    return needle in coin.name.lower() or needle in coin.symbol.lower()


def _matches_tab(coin: CoinSnapshot, tab: WatchlistTab) -> bool:
    if tab is WatchlistTab.ALL:
        return True

    change = coin.price_change_percentage_24h
    if change is None:
        return False
    if tab is WatchlistTab.BULLISH:
        return change > 0
    if tab is WatchlistTab.BEARISH:
        return change < 0
    return abs(change) < SIDEWAYS_BAND_PCT


def filter_coins(
    coins: Sequence[CoinSnapshot],
    tab: WatchlistTab | str = WatchlistTab.ALL,
    search: str = "",
) -> list[CoinSnapshot]:
    """Search by name/symbol, then keep the coins in ``tab``.

    Pure: the input sequence is never modified and order is preserved.
    Raises ``ValueError`` for an unknown tab.
    """

    tab = WatchlistTab(tab)
    needle = (search or "").lower()
    searched = [c for c in coins if _matches_search(c, needle)]
    return [c for c in searched if _matches_tab(c, tab)]


def chart_symbol(coin: CoinSnapshot) -> str:
    return f"{coin.symbol.upper()}{QUOTE_ASSET}"


def is_selected(coin: CoinSnapshot, selected_symbol: str) -> bool:
    return coin.symbol.upper() in selected_symbol


def find_coin(coins: Sequence[CoinSnapshot], coin_id: str) -> CoinSnapshot | None:
    for coin in coins:
        if coin.id == coin_id:
            return coin
    return None


def watchlist_entries(
    coins: Sequence[CoinSnapshot],
    tab: WatchlistTab | str,
    search: str,
    selected_symbol: str,
) -> list[WatchlistEntry]:
    return [
        WatchlistEntry(coin=c, chart_symbol=chart_symbol(c), selected=is_selected(c, selected_symbol))
        for c in filter_coins(coins, tab, search)
    ]
