"""Shared HTTP plumbing for the market and news providers."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx


class UpstreamError(Exception):
    """A provider call failed: transport error, non-2xx status, or bad JSON."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


async def get_json(
    source: str,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> Any:
    """GET ``url`` and decode the body as JSON.

    Uses ``client`` when given so callers can share one connection pool (and
    tests can plug in ``httpx.MockTransport``); otherwise a short-lived client
    is opened for the call.
    """

    try:
        if client is not None:
            response = await client.get(url, params=params)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        raise UpstreamError(source, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(source, f"request failed ({exc.__class__.__name__})") from exc
    except ValueError as exc:
        raise UpstreamError(source, "response body is not valid JSON") from exc
