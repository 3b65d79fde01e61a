from __future__ import annotations

from crypto_intel.schemas.news import NewsItem
from crypto_intel.services.classifier import (
    ALERT_KEYWORDS,
    MAX_ALERTS,
    MAX_TICKER_ITEMS,
    classify_alerts,
    is_alert,
    ticker_feed,
)


def _items(*titles: str) -> list[NewsItem]:
    return [NewsItem(title=t) for t in titles]


def test_elon_headline_is_alert_flat_market_is_not():
    items = _items("Elon tweets about Dogecoin", "Market closes flat")
    alerts = classify_alerts(items)
    assert [a.title for a in alerts] == ["Elon tweets about Dogecoin"]


def test_match_is_case_insensitive_substring():
    assert is_alert("WHALE moves 10k BTC")
    assert is_alert("Fed holds rates")
    # no word boundaries: "buy" inside "buyback", "sec" inside "second"
    assert is_alert("Exchange announces buyback")
    assert is_alert("Bitcoin posts second weekly gain")
    assert not is_alert("Market closes flat")


def test_alerts_preserve_feed_order_and_cap():
    items = _items(
        "nothing here",
        "SEC sues exchange",
        "whale alert 1",
        "quiet day",
        "CEO resigns",
        "listing on Binance",
        "big sell wall",
        "fed minutes",
    )
    alerts = classify_alerts(items)
    assert len(alerts) == MAX_ALERTS
    assert [a.title for a in alerts] == ["SEC sues exchange", "whale alert 1", "CEO resigns", "listing on Binance"]
    for a in alerts:
        assert any(k in a.title.lower() for k in ALERT_KEYWORDS)


def test_ticker_is_first_twenty_raw_items():
    items = _items(*[f"headline {i}" for i in range(35)])
    ticker = ticker_feed(items)
    assert len(ticker) == MAX_TICKER_ITEMS
    assert ticker[0].title == "headline 0"
    assert ticker[-1].title == "headline 19"


def test_extra_provider_fields_survive():
    item = NewsItem.model_validate({"title": "Whale buys", "url": "https://x", "source": "cc"})
    assert classify_alerts([item])[0].model_dump()["url"] == "https://x"
