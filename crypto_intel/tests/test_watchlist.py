from __future__ import annotations

import pytest

from crypto_intel.schemas.market import CoinSnapshot, WatchlistTab
from crypto_intel.services.watchlist import chart_symbol, filter_coins, is_selected, watchlist_entries


def _coin(cid: str, symbol: str, name: str, change_24h: float | None) -> CoinSnapshot:
    return CoinSnapshot(
        id=cid,
        symbol=symbol,
        name=name,
        image=f"https://img/{cid}.png",
        current_price=1.0,
        price_change_percentage_24h=change_24h,
    )


@pytest.fixture()
def coins() -> list[CoinSnapshot]:
    return [
        _coin("bitcoin", "btc", "Bitcoin", 2.5),
        _coin("ethereum", "eth", "Ethereum", -3.0),
        _coin("tether", "usdt", "Tether", 0.0),
        _coin("solana", "sol", "Solana", 1.0),
        _coin("ripple", "xrp", "XRP", -1.0),
        _coin("cardano", "ada", "Cardano", 0.4),
        _coin("newcoin", "new", "New Coin", None),
    ]


def test_all_is_identity_after_search(coins):
    assert filter_coins(coins, "all", "") == coins
    assert [c.id for c in filter_coins(coins, WatchlistTab.ALL, "BIT")] == ["bitcoin"]


def test_search_matches_symbol_or_name(coins):
    assert [c.id for c in filter_coins(coins, "all", "eth")] == ["ethereum", "tether"]
    assert [c.id for c in filter_coins(coins, "all", "SOL")] == ["solana"]
    assert [c.id for c in filter_coins(coins, "all", "coin")] == ["bitcoin", "newcoin"]


def test_bullish_bearish_are_strict(coins):
    bullish = filter_coins(coins, "bullish")
    bearish = filter_coins(coins, "bearish")
    assert [c.id for c in bullish] == ["bitcoin", "solana", "cardano"]
    assert [c.id for c in bearish] == ["ethereum", "ripple"]
    assert all(c.price_change_percentage_24h > 0 for c in bullish)
    assert all(c.price_change_percentage_24h < 0 for c in bearish)
    # exactly zero is neither
    assert "tether" not in {c.id for c in bullish + bearish}


def test_sideways_excludes_band_edge(coins):
    sideways = filter_coins(coins, "sideways")
    assert [c.id for c in sideways] == ["tether", "cardano"]
    assert all(abs(c.price_change_percentage_24h) < 1.0 for c in sideways)


def test_unknown_change_only_listed_under_all(coins):
    for tab in ("bullish", "bearish", "sideways"):
        assert "newcoin" not in {c.id for c in filter_coins(coins, tab)}
    assert "newcoin" in {c.id for c in filter_coins(coins, "all")}


def test_filter_is_pure_and_idempotent(coins):
    before = list(coins)
    first = filter_coins(coins, "bullish", "o")
    second = filter_coins(coins, "bullish", "o")
    assert first == second
    assert coins == before


def test_unknown_tab_rejected(coins):
    with pytest.raises(ValueError):
        filter_coins(coins, "moon")


def test_chart_symbol_and_selection(coins):
    btc = coins[0]
    assert chart_symbol(btc) == "BTCUSDT"
    assert is_selected(btc, "BTCUSDT")
    assert not is_selected(coins[1], "BTCUSDT")

    entries = watchlist_entries(coins, "all", "", "ETHUSDT")
    selected = [e.coin.id for e in entries if e.selected]
    # plain containment: "USDT" is inside every USDT pair
    assert selected == ["ethereum", "tether"]
