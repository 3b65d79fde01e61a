"""AI market-comment dispatcher backed by Google Gemini."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Sequence

import google.generativeai as genai

from crypto_intel.config.locales import language_directive
from crypto_intel.config.settings import get_settings
from crypto_intel.schemas.news import NewsItem
from crypto_intel.services.state import AnalystSlot, get_store

logger = logging.getLogger("crypto_intel.analyst")

OFFLINE_PLACEHOLDER = "AI Offline..."
ALERT_TITLE_SEPARATOR = ", "

TextGenerator = Callable[[str], Awaitable[str]]


class AnalystUnavailable(Exception):
    pass


class GeminiTextGenerator:
    """Single-turn prompt -> text call against a hosted Gemini model."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None) -> None:
        s = get_settings()
        self.api_key = api_key if api_key is not None else s.GEMINI_API_KEY
        self.model_name = model_name or s.GEMINI_MODEL
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise AnalystUnavailable("GEMINI_API_KEY is not configured")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def __call__(self, prompt: str) -> str:
        model = self._get_model()
        response = await model.generate_content_async(prompt)
        text = response.text
        if not text or not text.strip():
            raise AnalystUnavailable("model returned an empty answer")
        return text


def build_prompt(question: str, symbol: str, alerts: Sequence[NewsItem], locale: str) -> str:
    headlines = ALERT_TITLE_SEPARATOR.join(item.title for item in alerts)
    return (
        f"Berikan analisis singkat dalam {language_directive(locale)} "
        f"tentang koin {symbol} berdasarkan berita terbaru ini: {headlines}. "
        f"Pertanyaan: {question}"
    )


class AnalystDispatcher:
    """Owns the analyst response slot.

    Re-entry is not blocked here; callers check ``slot.pending`` first.
    """

    def __init__(self, slot: AnalystSlot, generate: Optional[TextGenerator] = None) -> None:
        self.slot = slot
        self.generate: TextGenerator = generate or GeminiTextGenerator()

    async def ask(
        self,
        question: str,
        symbol: str,
        alerts: Sequence[NewsItem],
        locale: str,
    ) -> Optional[str]:
        if not question or not question.strip():
            return None

        self.slot.question = question
        self.slot.pending = True
        try:
            prompt = build_prompt(question, symbol, alerts, locale)
            answer = await self.generate(prompt)
        except Exception:
            logger.exception("analyst request failed | symbol=%s", symbol)
            answer = OFFLINE_PLACEHOLDER
        finally:
            self.slot.pending = False

        self.slot.response = answer
        return answer


_dispatcher: AnalystDispatcher | None = None


def get_dispatcher() -> AnalystDispatcher:
    global _dispatcher
    slot = get_store().analyst
    if _dispatcher is None or _dispatcher.slot is not slot:
        _dispatcher = AnalystDispatcher(slot)
    return _dispatcher
