import asyncio
import datetime

import httpx
import pytest

from conftest import standings_payload

from fplsync.api.client import FplClient
from fplsync.config import Settings
from fplsync.errors import UpstreamError
from fplsync.report.collect import collect_snapshot, utc_timestamp


def test_utc_timestamp_has_milliseconds_and_z():
    now = datetime.datetime(2025, 8, 23, 12, 34, 56, 789123, tzinfo=datetime.timezone.utc)
    assert utc_timestamp(now) == "2025-08-23T12:34:56.789Z"


def test_utc_timestamp_converts_offsets():
    cet = datetime.timezone(datetime.timedelta(hours=2))
    now = datetime.datetime(2025, 8, 23, 14, 0, 0, tzinfo=cet)
    assert utc_timestamp(now) == "2025-08-23T12:00:00.000Z"


def test_failed_standings_cancels_bootstrap_request(base_env, sleeper):
    cancelled = []

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/standings/"):
            return httpx.Response(500)
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.append(request.url.path)
            raise
        return httpx.Response(200, json={})

    async def go():
        async with FplClient(transport=httpx.MockTransport(handler), sleep=sleeper) as client:
            await asyncio.wait_for(
                collect_snapshot(Settings.from_env(base_env), client, sleep=sleeper), 5
            )

    with pytest.raises(UpstreamError):
        asyncio.run(go())
    assert cancelled == ["/api/bootstrap-static/"]


def test_league_name_falls_back_to_app_name(base_env, sleeper):
    payload = standings_payload([1])
    payload["league"] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/standings/"):
            return httpx.Response(200, json=payload)
        if request.url.path.endswith("/bootstrap-static/"):
            return httpx.Response(200, json={"events": [], "teams": [], "elements": []})
        return httpx.Response(200, json={"current": []})

    async def go():
        async with FplClient(transport=httpx.MockTransport(handler), sleep=sleeper) as client:
            return await collect_snapshot(Settings.from_env(base_env), client, sleep=sleeper)

    snapshot = asyncio.run(go())
    assert snapshot.league_name == "SSJ-Fantacy"
    assert snapshot.members[0].member.entry_id == 1
