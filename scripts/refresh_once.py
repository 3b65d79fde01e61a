import sys
from pathlib import Path
sys.path.append(str(Path(__file__).resolve().parents[1]))

import asyncio
import logging

from crypto_intel.jobs.refresh import RefreshPipeline
from crypto_intel.services.state import get_store


async def main():
    result = await RefreshPipeline().refresh()
    if not result.ok:
        print("❌ refresh failed:", result.error)
        return

    market = get_store().market
    print(f"✅ coins={result.coins} alerts={result.alerts} ticker={result.ticker} | {result.duration_ms}ms")
    for item in market.alerts:
        print("   ⚠️", item.title)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
