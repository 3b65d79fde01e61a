# crypto_intel/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"
CRYPTOCOMPARE_NEWS_URL = "https://min-api.cryptocompare.com/data/v2/news/"


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_optional(value: str | None) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    MARKET_DATA_URL: str
    MARKET_VS_CURRENCY: str
    MARKET_PER_PAGE: int
    NEWS_URL: str
    NEWS_LANG: str
    HTTP_TIMEOUT_SECONDS: float
    REFRESH_ENABLED: bool
    REFRESH_INTERVAL_SECONDS: int
    GEMINI_API_KEY: Optional[str]
    GEMINI_MODEL: str
    DEFAULT_LOCALE: str
    DEFAULT_SYMBOL: str
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            MARKET_DATA_URL=os.getenv("MARKET_DATA_URL", COINGECKO_MARKETS_URL),
            MARKET_VS_CURRENCY=os.getenv("MARKET_VS_CURRENCY", "usd"),
            MARKET_PER_PAGE=parse_int(os.getenv("MARKET_PER_PAGE"), 100),
            NEWS_URL=os.getenv("NEWS_URL", CRYPTOCOMPARE_NEWS_URL),
            NEWS_LANG=os.getenv("NEWS_LANG", "EN"),
            HTTP_TIMEOUT_SECONDS=parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), 10.0),
            REFRESH_ENABLED=parse_bool(os.getenv("REFRESH_ENABLED"), True),
            REFRESH_INTERVAL_SECONDS=parse_int(os.getenv("REFRESH_INTERVAL_SECONDS"), 60),
            GEMINI_API_KEY=parse_optional(os.getenv("GEMINI_API_KEY")),
            GEMINI_MODEL=os.getenv("GEMINI_MODEL", "gemini-pro"),
            DEFAULT_LOCALE=os.getenv("DEFAULT_LOCALE", "id"),
            DEFAULT_SYMBOL=os.getenv("DEFAULT_SYMBOL", "BTCUSDT"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
