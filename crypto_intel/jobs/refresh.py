# crypto_intel/jobs/refresh.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from crypto_intel.config.settings import get_settings
from crypto_intel.services.classifier import classify_alerts, ticker_feed
from crypto_intel.services.coingecko import fetch_raw_market_data, parse_market_payload
from crypto_intel.services.news_feed import fetch_raw_news, parse_news_payload
from crypto_intel.services.state import DashboardStore, get_store
from crypto_intel.services.upstream import UpstreamError
from crypto_intel.utils.time import iso_z_from_epoch, utcnow

logger = logging.getLogger("crypto_intel.refresh")

Fetcher = Callable[..., Awaitable[Any]]


@dataclass
class RefreshResult:
    ok: bool
    coins_updated: bool = False
    news_updated: bool = False
    coins: int = 0
    alerts: int = 0
    ticker: int = 0
    duration_ms: int = 0
    error: Optional[str] = None


# ----------------------------
# pipeline
# ----------------------------
class RefreshPipeline:
    """One refresh tick: fetch market + news together, classify, swap state.

    A tick either lands whole or not at all. Failures go to ``log`` and leave
    the previous state in place.
    """

    def __init__(
        self,
        store: Optional[DashboardStore] = None,
        fetch_market: Fetcher = fetch_raw_market_data,
        fetch_news: Fetcher = fetch_raw_news,
        log: Optional[logging.Logger] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._store = store
        self.fetch_market = fetch_market
        self.fetch_news = fetch_news
        self.log = log or logger
        self.client = client
        self._alive = True

    @property
    def store(self) -> DashboardStore:
        return self._store if self._store is not None else get_store()

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        """Stop accepting results; ticks still in flight will write nothing."""
        self._alive = False

    async def refresh(self) -> RefreshResult:
        store = self.store
        tick = store.next_tick()
        t0 = time.perf_counter()

        def _ms() -> int:
            return int((time.perf_counter() - t0) * 1000)

        market_raw, news_raw = await asyncio.gather(
            self.fetch_market(client=self.client),
            self.fetch_news(client=self.client),
            return_exceptions=True,
        )

        for raw in (market_raw, news_raw):
            if isinstance(raw, BaseException):
                if isinstance(raw, UpstreamError):
                    self.log.warning("refresh tick %s aborted | %s", tick, raw)
                else:
                    self.log.error("refresh tick %s aborted | unexpected error", tick, exc_info=raw)
                return RefreshResult(ok=False, duration_ms=_ms(), error=repr(raw)[:300])

        coins = parse_market_payload(market_raw)
        if coins is None:
            self.log.warning("refresh tick %s | market payload ignored (not a coin list)", tick)

        news = parse_news_payload(news_raw)
        alerts = ticker = None
        if news is None:
            self.log.warning("refresh tick %s | news payload ignored (no titled Data items)", tick)
        else:
            alerts = classify_alerts(news)
            ticker = ticker_feed(news)

        if not self._alive:
            self.log.info("refresh tick %s finished after shutdown; discarded", tick)
            return RefreshResult(ok=False, duration_ms=_ms(), error="pipeline closed")

        if coins is None and news is None:
            self.log.warning("refresh tick %s | neither payload usable; state left as is", tick)
            return RefreshResult(ok=False, duration_ms=_ms(), error="no usable market or news payload")

        applied = store.apply_refresh(
            tick=tick,
            at=utcnow(),
            coins=coins,
            news=news,
            alerts=alerts,
            ticker=ticker,
        )
        if not applied:
            self.log.info("refresh tick %s superseded by a newer tick; discarded", tick)
            return RefreshResult(ok=False, duration_ms=_ms(), error="superseded")

        market = store.market
        result = RefreshResult(
            ok=True,
            coins_updated=coins is not None,
            news_updated=news is not None,
            coins=len(market.coins),
            alerts=len(market.alerts),
            ticker=len(market.ticker),
            duration_ms=_ms(),
        )
        self.log.info(
            "refresh tick %s done | coins=%s alerts=%s ticker=%s | %dms",
            tick, result.coins, result.alerts, result.ticker, result.duration_ms,
        )
        return result


_pipeline: RefreshPipeline | None = None


def get_pipeline() -> RefreshPipeline:
    global _pipeline
    if _pipeline is None or not _pipeline.alive:
        _pipeline = RefreshPipeline()
    return _pipeline


# ----------------------------
# scheduler state + handle
# ----------------------------
@dataclass
class RefreshJobState:
    started: bool = False
    stop_event: Optional[asyncio.Event] = None
    task: Optional[asyncio.Task] = None
    pipeline: Optional[RefreshPipeline] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RefreshJobHandle:
    """
    Kept on app.state.refresh_job while the app is up.
    """
    _state: RefreshJobState

    @property
    def running(self) -> bool:
        return bool(self._state.started and self._state.stop_event and not self._state.stop_event.is_set())


_state = RefreshJobState()


def _fresh_stats(schedule_s: int) -> Dict[str, Any]:
    return {
        "schedule_s": schedule_s,
        "last_run_ts": None,
        "last_success_ts": None,
        "last_success_ms": None,
        "consecutive_failures": 0,
        "last_error_ts": None,
        "last_error": None,
    }


def get_refresh_status() -> Dict[str, Any]:
    running = bool(_state.started and _state.stop_event and not _state.stop_event.is_set())
    meta = dict(_state.meta)
    started_at = meta.get("started_at")
    s = _state.stats

    per_job: Dict[str, Any] = {}
    if s:
        per_job["refresh"] = {
            **s,
            "last_run_iso": iso_z_from_epoch(s.get("last_run_ts")),
            "last_success_iso": iso_z_from_epoch(s.get("last_success_ts")),
            "last_error_iso": iso_z_from_epoch(s.get("last_error_ts")),
        }

    return {
        "ok": running,
        "running": running,
        "jobs": 1 if _state.task else 0,
        "uptime_s": int(time.time() - started_at) if started_at else None,
        "meta": {**meta, "started_at_iso": iso_z_from_epoch(started_at)},
        "per_job": per_job,
    }


# ----------------------------
# job loop
# ----------------------------
async def _job_loop(pipeline: RefreshPipeline, stop_event: asyncio.Event, schedule_seconds: int) -> None:
    next_tick = time.monotonic()  # run immediately once

    while not stop_event.is_set():
        now = time.monotonic()
        if now < next_tick:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=(next_tick - now))
            except asyncio.TimeoutError:
                pass
            continue

        stats = _state.stats
        stats["last_run_ts"] = time.time()
        try:
            result = await pipeline.refresh()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            result = RefreshResult(ok=False, error=repr(e)[:300])
            logger.exception("refresh job error")

        if result.ok:
            stats["last_success_ts"] = time.time()
            stats["last_success_ms"] = result.duration_ms
            stats["consecutive_failures"] = 0
        else:
            stats["last_error_ts"] = time.time()
            stats["last_error"] = result.error
            stats["consecutive_failures"] = int(stats.get("consecutive_failures", 0)) + 1

        next_tick += schedule_seconds
        if next_tick < time.monotonic() - schedule_seconds:
            next_tick = time.monotonic() + schedule_seconds


# ----------------------------
# public API
# ----------------------------
def start_refresh_job(pipeline: Optional[RefreshPipeline] = None) -> Optional[RefreshJobHandle]:
    settings = get_settings()

    if not settings.REFRESH_ENABLED:
        logger.info("refresh job disabled (REFRESH_ENABLED=false)")
        return None

    if _state.started and _state.stop_event and not _state.stop_event.is_set():
        logger.warning("refresh job already started (in-process)")
        return RefreshJobHandle(_state)

    schedule_seconds = max(1, int(settings.REFRESH_INTERVAL_SECONDS))
    pipeline = pipeline or get_pipeline()

    _state.pipeline = pipeline
    _state.stop_event = asyncio.Event()
    _state.started = True
    _state.meta = {"started_at": time.time(), "schedule_s": schedule_seconds}
    _state.stats = _fresh_stats(schedule_seconds)
    _state.task = asyncio.create_task(
        _job_loop(pipeline, _state.stop_event, schedule_seconds),
        name="refresh",
    )

    logger.info("refresh job started | interval_s=%s", schedule_seconds)
    return RefreshJobHandle(_state)


async def stop_refresh_job(timeout_s: float = 6.0) -> None:
    # manual ticks run on the shared pipeline even when the job is disabled
    if _pipeline is not None:
        _pipeline.close()

    if not _state.started:
        return

    if _state.stop_event:
        _state.stop_event.set()

    # results of requests still in flight must not land after teardown
    if _state.pipeline:
        _state.pipeline.close()

    task = _state.task
    try:
        if task:
            await asyncio.wait_for(asyncio.gather(task, return_exceptions=True), timeout=timeout_s)
    except asyncio.TimeoutError:
        if not task.done():
            task.cancel()
        await asyncio.gather(task, return_exceptions=True)
    finally:
        _state.task = None
        _state.pipeline = None
        _state.started = False
        _state.stop_event = None
        _state.meta = {}
        _state.stats = {}

    logger.info("refresh job stopped")
