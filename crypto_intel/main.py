# crypto_intel/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from crypto_intel.api.analyst import router as analyst_router
from crypto_intel.api.dashboard import router as dashboard_router
from crypto_intel.api.health import router as health_router
from crypto_intel.api.market import router as market_router
from crypto_intel.api.news import router as news_router

from crypto_intel.config.settings import get_settings
from crypto_intel.jobs.refresh import start_refresh_job, stop_refresh_job


logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Crypto Intel Dashboard API")

# Routers
app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(market_router)
app.include_router(news_router)
app.include_router(analyst_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Crypto News Only"}


@app.on_event("startup")
async def on_startup() -> None:
    # first tick runs immediately, then every REFRESH_INTERVAL_SECONDS
    app.state.refresh_job = start_refresh_job()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await stop_refresh_job()
    app.state.refresh_job = None
