from __future__ import annotations

from dataclasses import replace

import pytest

from crypto_intel.config import settings as settings_module
from crypto_intel.services import state as state_module


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    base = settings_module.Settings.from_env()
    monkeypatch.setattr(
        settings_module,
        "_settings",
        replace(
            base,
            GEMINI_API_KEY=None,
            DEFAULT_LOCALE="id",
            DEFAULT_SYMBOL="BTCUSDT",
            REFRESH_ENABLED=True,
            REFRESH_INTERVAL_SECONDS=60,
        ),
    )
    monkeypatch.setattr(state_module, "_store", None)
    yield state_module.get_store()
