from __future__ import annotations

from fastapi import APIRouter

from crypto_intel.api.errors import error_response
from crypto_intel.config.locales import SUPPORTED_LOCALES, normalize_locale
from crypto_intel.schemas.analyst import AnalystState, AskRequest
from crypto_intel.services.analyst import get_dispatcher
from crypto_intel.services.state import get_store


router = APIRouter(prefix="/analyst", tags=["analyst"])


def _analyst_state() -> AnalystState:
    slot = get_store().analyst
    return AnalystState(question=slot.question, response=slot.response, pending=slot.pending)


@router.get("", response_model=AnalystState)
async def get_analyst():
    return _analyst_state()


@router.post("/ask", response_model=AnalystState)
async def ask_analyst(payload: AskRequest):
    store = get_store()
    if store.analyst.pending:
        return error_response(
            code="ai_pending",
            message="An analyst request is already in progress.",
            status_code=409,
        )

    try:
        locale = normalize_locale(payload.locale or store.selection.locale)
    except ValueError:
        return error_response(
            code="unsupported_locale",
            message=f"Unsupported locale '{payload.locale}'",
            status_code=422,
            details={"supported": list(SUPPORTED_LOCALES)},
        )

    await get_dispatcher().ask(
        question=payload.question,
        symbol=payload.symbol or store.selection.symbol,
        alerts=store.market.alerts,
        locale=locale,
    )
    return _analyst_state()
