"""Async HTTP client for the Fantasy Premier League API.

This module centralizes the upstream read concerns:
- A fixed browser-like header set (the API rejects obvious bots)
- A bounded retry policy: 429s back off ``attempt x 3`` seconds, transport
  failures and other non-2xx responses wait a flat 2 seconds
- Thin endpoint helpers bound to the configured base URL

Every call is independent; there is no caching and no request coalescing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from fplsync.errors import RateLimitedError, UpstreamError
from fplsync.report.constants import (
    FPL_BASE_URL,
    FPL_HEADERS,
    MAX_ATTEMPTS,
    RATE_LIMIT_BACKOFF_SEC,
    REQUEST_TIMEOUT_SEC,
    TRANSPORT_RETRY_SEC,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class FplClient:
    """Wrapper around ``httpx.AsyncClient`` for the FPL read API.

    Use as an async context manager. ``transport`` and ``sleep`` exist so tests
    can fake the network and skip real waiting.
    """

    def __init__(
        self,
        base_url: str = FPL_BASE_URL,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        timeout: float = REQUEST_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            headers=FPL_HEADERS, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "FplClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch(self, path: str) -> Any:
        """GET ``base_url + path`` and return decoded JSON.

        Raises RateLimitedError if every attempt was answered with 429,
        UpstreamError for the last non-2xx status, or the last
        ``httpx.TransportError`` / ``ValueError`` (bad JSON) once the attempt
        budget is spent.
        """
        url = self.base_url + path
        for attempt in range(1, self.max_attempts + 1):
            last = attempt == self.max_attempts
            try:
                resp = await self._http.get(url)
                if resp.status_code == 429:
                    wait = attempt * RATE_LIMIT_BACKOFF_SEC
                    logger.warning("Rate limited on %s; waiting %.0fs", path, wait)
                    await self._sleep(wait)
                    if last:
                        raise RateLimitedError(path, self.max_attempts)
                    continue
                if not resp.is_success:
                    raise UpstreamError(resp.status_code, path)
                return resp.json()
            except RateLimitedError:
                raise
            except (httpx.TransportError, UpstreamError, ValueError) as exc:
                if last:
                    raise
                logger.debug(
                    "Attempt %d/%d for %s failed: %s", attempt, self.max_attempts, path, exc
                )
                await self._sleep(TRANSPORT_RETRY_SEC)
        raise AssertionError("unreachable")  # pragma: no cover

    # --- endpoints ---

    async def league_standings(self, league_id: str | int) -> dict:
        return await self.fetch(f"/leagues-classic/{league_id}/standings/")

    async def bootstrap_static(self) -> dict:
        return await self.fetch("/bootstrap-static/")

    async def entry_history(self, entry_id: int) -> dict:
        return await self.fetch(f"/entry/{entry_id}/history/")

    async def entry_picks(self, entry_id: int, event_id: int) -> dict:
        return await self.fetch(f"/entry/{entry_id}/event/{event_id}/picks/")
