from __future__ import annotations

import httpx
import pytest

from crypto_intel.services.coingecko import fetch_raw_market_data, parse_market_payload
from crypto_intel.services.news_feed import fetch_raw_news, parse_news_payload
from crypto_intel.services.upstream import UpstreamError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_market_request_asks_for_all_change_windows():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=[{"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"}])

    async with _client(handler) as client:
        body = await fetch_raw_market_data(client=client)

    params = seen["url"].params
    assert seen["url"].path == "/api/v3/coins/markets"
    assert params["vs_currency"] == "usd"
    assert params["order"] == "market_cap_desc"
    assert params["per_page"] == "100"
    assert params["sparkline"] == "false"
    assert params["price_change_percentage"] == "1h,24h,7d,30d,1y"
    assert body[0]["id"] == "bitcoin"


@pytest.mark.asyncio
async def test_news_request_uses_lang():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"Data": [{"title": "hello"}]})

    async with _client(handler) as client:
        body = await fetch_raw_news(client=client)

    assert seen["url"].host == "min-api.cryptocompare.com"
    assert seen["url"].params["lang"] == "EN"
    assert body["Data"][0]["title"] == "hello"


@pytest.mark.asyncio
async def test_non_ok_status_raises_upstream_error():
    async with _client(lambda request: httpx.Response(429, json={"status": "slow down"})) as client:
        with pytest.raises(UpstreamError) as err:
            await fetch_raw_market_data(client=client)
    assert err.value.source == "coingecko"
    assert "429" in str(err.value)


@pytest.mark.asyncio
async def test_bad_json_raises_upstream_error():
    async with _client(lambda request: httpx.Response(200, content=b"<html>oops</html>")) as client:
        with pytest.raises(UpstreamError) as err:
            await fetch_raw_news(client=client)
    assert err.value.source == "cryptocompare"


@pytest.mark.asyncio
async def test_transport_error_raises_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(UpstreamError):
            await fetch_raw_market_data(client=client)


def test_parse_market_payload_rejects_wholesale():
    good = [{"id": "bitcoin", "symbol": "btc", "name": "Bitcoin", "current_price": 1, "price_change_percentage_24h": None}]
    assert parse_market_payload(good)[0].price_change_percentage_24h is None
    assert parse_market_payload({"status": {"error_code": 429}}) is None
    assert parse_market_payload(good + [{"symbol": "eth"}]) is None


def test_parse_news_payload():
    assert parse_news_payload({"Data": [{"title": "a", "url": "u"}]})[0].title == "a"
    assert parse_news_payload({"Data": {}}) is None
    assert parse_news_payload({"Message": "no data"}) is None
    assert parse_news_payload([{"title": "a"}]) is None
    assert parse_news_payload({"Data": [{"body": "untitled"}]}) is None
