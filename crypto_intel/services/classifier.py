"""Keyword classification of news headlines into high-impact alerts."""

from __future__ import annotations

from typing import Iterable, Sequence

from crypto_intel.schemas.news import NewsItem


# Plain substring match on the lower-cased title; no stemming or word
# boundaries ("buy" also hits "buyback", "sec" hits "second").
ALERT_KEYWORDS: tuple[str, ...] = ("whale", "elon", "sec", "fed", "ceo", "buy", "sell", "listing")

MAX_ALERTS = 4
MAX_TICKER_ITEMS = 20


def is_alert(title: str, keywords: Iterable[str] = ALERT_KEYWORDS) -> bool:
    folded = title.lower()
    return any(key in folded for key in keywords)


def classify_alerts(
    items: Sequence[NewsItem],
    keywords: Iterable[str] = ALERT_KEYWORDS,
    limit: int = MAX_ALERTS,
) -> list[NewsItem]:
    """First ``limit`` items whose title hits a keyword, in feed order."""

    keys = tuple(keywords)
    matched = [item for item in items if is_alert(item.title, keys)]
    return matched[:limit]


def ticker_feed(items: Sequence[NewsItem], limit: int = MAX_TICKER_ITEMS) -> list[NewsItem]:
    return list(items[:limit])
