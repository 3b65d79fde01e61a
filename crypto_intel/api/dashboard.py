# crypto_intel/api/dashboard.py
from __future__ import annotations

from fastapi import APIRouter

from crypto_intel.api.errors import error_response
from crypto_intel.config.locales import SUPPORTED_LOCALES, get_strings, normalize_locale, toggle_locale
from crypto_intel.schemas.analyst import AnalystState
from crypto_intel.schemas.dashboard import (
    ChartConfig,
    DashboardView,
    LocaleState,
    LocaleUpdate,
    SelectionState,
    SelectionUpdate,
)
from crypto_intel.services.state import DashboardStore, get_store
from crypto_intel.services.watchlist import chart_symbol, find_coin, watchlist_entries


router = APIRouter(tags=["dashboard"])


def _selection_state(store: DashboardStore) -> SelectionState:
    sel = store.selection
    return SelectionState(symbol=sel.symbol, tab=sel.tab, search=sel.search)


def _locale_state(store: DashboardStore) -> LocaleState:
    locale = store.selection.locale
    return LocaleState(locale=locale, strings=get_strings(locale))


@router.get("/dashboard", response_model=DashboardView)
async def get_dashboard():
    store = get_store()
    market = store.market
    sel = store.selection
    slot = store.analyst

    return DashboardView(
        selection=_selection_state(store),
        chart=ChartConfig(symbol=sel.symbol),
        watchlist=watchlist_entries(market.coins, sel.tab, sel.search, sel.symbol),
        coins_total=len(market.coins),
        alerts=list(market.alerts),
        ticker=list(market.ticker),
        analyst=AnalystState(question=slot.question, response=slot.response, pending=slot.pending),
        locale=_locale_state(store),
        last_refresh=market.last_refresh,
    )


@router.put("/dashboard/selection", response_model=SelectionState)
async def update_selection(payload: SelectionUpdate):
    store = get_store()
    sel = store.selection

    symbol = sel.symbol
    if payload.coin_id is not None:
        coin = find_coin(store.market.coins, payload.coin_id)
        if coin is None:
            return error_response(
                code="coin_not_found",
                message=f"Unknown coin id '{payload.coin_id}'",
                status_code=404,
                details={"coin_id": payload.coin_id},
            )
        symbol = chart_symbol(coin)
    elif payload.symbol is not None:
        symbol = payload.symbol

    sel.symbol = symbol
    if payload.tab is not None:
        sel.tab = payload.tab
    if payload.search is not None:
        sel.search = payload.search

    return _selection_state(store)


@router.get("/chart", response_model=ChartConfig)
async def get_chart():
    return ChartConfig(symbol=get_store().selection.symbol)


@router.get("/locale", response_model=LocaleState)
async def get_locale():
    return _locale_state(get_store())


@router.put("/locale", response_model=LocaleState)
async def set_locale(payload: LocaleUpdate):
    store = get_store()
    try:
        store.selection.locale = normalize_locale(payload.locale)
    except ValueError:
        return error_response(
            code="unsupported_locale",
            message=f"Unsupported locale '{payload.locale}'",
            status_code=422,
            details={"supported": list(SUPPORTED_LOCALES)},
        )
    return _locale_state(store)


@router.post("/locale/toggle", response_model=LocaleState)
async def flip_locale():
    store = get_store()
    store.selection.locale = toggle_locale(store.selection.locale)
    return _locale_state(store)
