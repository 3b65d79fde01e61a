# crypto_intel/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Response

from crypto_intel.jobs.refresh import get_refresh_status
from crypto_intel.services.state import get_store
from crypto_intel.utils.readiness import annotate_refresh_jobs

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()


def _iso_z(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_ts": now_ts,
        "now_unix": int(now_ts),
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


# ----------------------------
# Checks
# ----------------------------
def _check_market_data() -> Dict[str, Any]:
    market = get_store().market
    return {
        "ok": bool(market.coins),
        "coins": len(market.coins),
        "alerts": len(market.alerts),
        "ticker": len(market.ticker),
        "last_refresh_iso": _iso_z(market.last_refresh),
    }


def _check_refresh_job() -> Dict[str, Any]:
    t0 = time.time()
    status = get_refresh_status()
    status["latency_ms"] = int((time.time() - t0) * 1000)
    return status


async def build_ready_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        **_now_meta(),
        "checks": {
            "market": _check_market_data(),
            "refresh": _check_refresh_job(),
        },
    }


# ----------------------------
# Endpoints
# ----------------------------
@router.get("/live")
async def live():
    return {"status": "ok"}


@router.get("/ready")
async def ready(response: Response):
    payload = await build_ready_payload()
    checks = payload["checks"]

    degraded_reasons = []

    if not checks["market"]["ok"]:
        degraded_reasons.append("market_data_empty")

    refresh = checks["refresh"]
    if refresh.get("running"):
        refresh, stale = annotate_refresh_jobs(refresh)
        if stale:
            degraded_reasons.append("refresh_stalled")
            payload["stale_jobs"] = stale
            refresh["ok"] = False
        else:
            refresh["ok"] = True
    else:
        degraded_reasons.append("refresh_not_running")

    if degraded_reasons:
        payload["status"] = "degraded"
        payload["degraded"] = True
        payload["degraded_reasons"] = degraded_reasons
        response.status_code = 503
    else:
        payload["degraded"] = False
        payload["degraded_reasons"] = []

    return payload


@router.get("/health")
async def health(response: Response):
    # Deep health == readiness here
    return await ready(response)
