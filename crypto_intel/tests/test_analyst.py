from __future__ import annotations

import httpx
import pytest

from crypto_intel.schemas.news import NewsItem
from crypto_intel.services.analyst import (
    OFFLINE_PLACEHOLDER,
    AnalystDispatcher,
    GeminiTextGenerator,
    build_prompt,
)
from crypto_intel.services.state import AnalystSlot


ALERTS = [NewsItem(title="Elon tweets about Dogecoin"), NewsItem(title="Fed pauses hikes")]


def test_prompt_embeds_symbol_headlines_question_and_language():
    prompt = build_prompt("Will it pump?", "DOGEUSDT", ALERTS, "en")
    assert "DOGEUSDT" in prompt
    assert "Elon tweets about Dogecoin, Fed pauses hikes" in prompt
    assert "Will it pump?" in prompt
    assert "English" in prompt

    assert "Bahasa Indonesia" in build_prompt("Naik?", "BTCUSDT", [], "id")


@pytest.mark.asyncio
async def test_ask_stores_answer_and_clears_pending():
    slot = AnalystSlot()
    seen = {}

    async def generate(prompt: str) -> str:
        seen["prompt"] = prompt
        seen["pending"] = slot.pending
        return "Momentum looks positive."

    dispatcher = AnalystDispatcher(slot, generate)
    answer = await dispatcher.ask("Outlook?", "BTCUSDT", ALERTS, "en")

    assert answer == "Momentum looks positive."
    assert slot.response == "Momentum looks positive."
    assert slot.question == "Outlook?"
    assert seen["pending"] is True
    assert slot.pending is False
    assert "BTCUSDT" in seen["prompt"]


@pytest.mark.asyncio
async def test_network_error_becomes_placeholder_and_discards_prior():
    slot = AnalystSlot(response="old answer")

    async def generate(prompt: str) -> str:
        raise httpx.ConnectError("unreachable")

    answer = await AnalystDispatcher(slot, generate).ask("Outlook?", "BTCUSDT", ALERTS, "id")

    assert answer == OFFLINE_PLACEHOLDER
    assert slot.response == OFFLINE_PLACEHOLDER
    assert slot.pending is False


@pytest.mark.asyncio
async def test_blank_question_makes_no_call():
    slot = AnalystSlot(response="keep me")
    calls = []

    async def generate(prompt: str) -> str:
        calls.append(prompt)
        return "x"

    assert await AnalystDispatcher(slot, generate).ask("   ", "BTCUSDT", ALERTS, "en") is None
    assert calls == []
    assert slot.response == "keep me"


@pytest.mark.asyncio
async def test_missing_api_key_falls_back_to_placeholder():
    slot = AnalystSlot()
    dispatcher = AnalystDispatcher(slot, GeminiTextGenerator(api_key=""))

    assert await dispatcher.ask("Outlook?", "BTCUSDT", ALERTS, "en") == OFFLINE_PLACEHOLDER


@pytest.mark.asyncio
async def test_unsupported_locale_falls_back_to_placeholder():
    slot = AnalystSlot(response="old")
    calls = []

    async def generate(prompt: str) -> str:
        calls.append(prompt)
        return "x"

    answer = await AnalystDispatcher(slot, generate).ask("Outlook?", "BTCUSDT", [], "fr")

    assert answer == OFFLINE_PLACEHOLDER
    assert slot.response == OFFLINE_PLACEHOLDER
    assert slot.pending is False
    assert calls == []
