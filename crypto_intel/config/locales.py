"""Static dashboard string tables for the two supported locales."""

from __future__ import annotations

from typing import Dict


SUPPORTED_LOCALES = ("id", "en")
DEFAULT_LOCALE = "id"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "id": {
        "title": "CRYPTO NEWS ONLY.ID",
        "status": "PASAR AKTIF",
        "search": "Pindai 250+ Aset Digital...",
        "intelTitle": "INTELIJEN WHALE & INSTITUSI",
        "intelSub": "MONITOR REAL-TIME PERGERAKAN CEO, PEMERINTAH, & WHALE",
        "aiPlaceholder": "Analisa dampak intelijen terhadap harga...",
        "runIntel": "PROSES DATA",
        "watchlist": "Monitor Pasar",
        "aiLoading": "Menganalisa...",
        "aiDefault": "Pilih koin untuk memulai analisa mendalam.",
        "impactAlpha": "DAMPAK TINGGI",
        "scanning": "Mencegat sinyal satelit...",
        "all": "SEMUA",
        "bullish": "NAIK",
        "bearish": "TURUN",
        "sideways": "STABIL",
        "disclaimer": "Analisis AI bukan saran keuangan. Selalu riset mandiri (DYOR).",
    },
    "en": {
        "title": "CRYPTO NEWS ONLY.ID",
        "status": "MARKET ACTIVE",
        "search": "Scan 250+ Digital Assets...",
        "intelTitle": "WHALE & INSTITUTIONAL INTEL",
        "intelSub": "REAL-TIME CEO, GOVERNMENT, & WHALE TRACKER",
        "aiPlaceholder": "Analyze impact of intelligence on price...",
        "runIntel": "RUN INTEL",
        "watchlist": "Market Watchlist",
        "aiLoading": "Analyzing...",
        "aiDefault": "Select a coin to start deep analysis.",
        "impactAlpha": "HIGH IMPACT",
        "scanning": "Intercepting signals...",
        "all": "ALL",
        "bullish": "BULLISH",
        "bearish": "BEARISH",
        "sideways": "SIDEWAYS",
        "disclaimer": "AI analysis is not financial advice. DYOR.",
    },
}

# Language name the model is asked to answer in.
LANGUAGE_DIRECTIVES: Dict[str, str] = {
    "id": "Bahasa Indonesia",
    "en": "English",
}


def normalize_locale(locale: str | None) -> str:
    if not locale:
        return DEFAULT_LOCALE
    key = locale.strip().lower()
    if key not in TRANSLATIONS:
        raise ValueError(f"Unsupported locale: {locale}")
    return key


def get_strings(locale: str | None) -> Dict[str, str]:
    return dict(TRANSLATIONS[normalize_locale(locale)])


def toggle_locale(locale: str | None) -> str:
    return "en" if normalize_locale(locale) == "id" else "id"


def language_directive(locale: str | None) -> str:
    return LANGUAGE_DIRECTIVES[normalize_locale(locale)]
