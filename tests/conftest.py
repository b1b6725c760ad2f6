from __future__ import annotations

import re

import httpx
import pytest


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records instead of waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeResponse:
    def __init__(self, status_code: int, payload: dict | None = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> dict:
        return self._payload


class FakeSession:
    """Records PATCH calls the way GistPublisher makes them."""

    def __init__(self, response: FakeResponse) -> None:
        self.headers: dict[str, str] = {}
        self.response = response
        self.calls: list[dict] = []

    def patch(self, url: str, json=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        return self.response


def gist_response(gist_id: str = "abc123", filename: str = "ssj-fpl-data.json") -> FakeResponse:
    return FakeResponse(
        200,
        {
            "id": gist_id,
            "owner": {"login": "octo"},
            "files": {
                filename: {
                    "raw_url": f"https://gist.githubusercontent.com/octo/{gist_id}/raw/deadbeef/{filename}"
                }
            },
        },
    )


def bootstrap_payload() -> dict:
    return {
        "events": [
            {"id": 1, "deadline_time": "2025-08-15T17:30:00Z", "finished": True},
            {"id": 2, "deadline_time": "2025-08-22T17:30:00Z", "is_current": True},
            {"id": 3, "deadline_time": "2025-08-30T10:00:00Z", "is_next": True},
        ],
        "teams": [
            {"id": 1, "short_name": "ARS"},
            {"id": 2, "short_name": "LIV"},
        ],
        "elements": [
            {"id": 10, "web_name": "Raya", "team": 1, "element_type": 1,
             "event_points": 6, "total_points": 14, "now_cost": 55, "form": "3.0"},
            {"id": 11, "web_name": "Salah", "team": 2, "element_type": 3,
             "event_points": 6, "total_points": 20, "now_cost": 125, "form": "8.5"},
            {"id": 12, "web_name": "Saka", "team": 1, "element_type": 3,
             "event_points": 2, "total_points": 9, "now_cost": 100, "form": "4.0"},
        ],
    }


def standings_payload(entry_ids: list[int], name: str = "Office League") -> dict:
    return {
        "league": {"id": 99, "name": name},
        "standings": {
            "results": [
                {
                    "entry": eid,
                    "rank": i + 1,
                    "last_rank": i + 2,
                    "entry_name": f"Team {eid}",
                    "player_name": f"Manager {eid}",
                    "total": 150 - i,
                    "event_total": 60 - i,
                }
                for i, eid in enumerate(entry_ids)
            ]
        },
    }


def history_payload(entry_id: int) -> dict:
    return {
        "current": [
            {"event": 1, "points": 70, "total_points": 70, "rank": 1000 + entry_id, "active_chip": None},
            {"event": 2, "points": 60, "total_points": 130, "rank": 900 + entry_id, "active_chip": "bboost"},
        ]
    }


def picks_payload() -> dict:
    return {
        "active_chip": None,
        "picks": [
            {"element": 10, "position": 1, "multiplier": 1, "is_captain": False, "is_vice_captain": False},
            {"element": 11, "position": 2, "multiplier": 2, "is_captain": True, "is_vice_captain": False},
            {"element": 12, "position": 12, "multiplier": 0, "is_captain": False, "is_vice_captain": True},
        ],
    }


class FplApiStub:
    """Routes FPL API paths to canned payloads for httpx.MockTransport.

    ``fail_history`` / ``fail_picks`` hold entry ids whose request always
    answers ``fail_status``. Every request path is recorded in ``requests``.
    """

    HISTORY_RE = re.compile(r"/entry/(\d+)/history/$")
    PICKS_RE = re.compile(r"/entry/(\d+)/event/(\d+)/picks/$")

    def __init__(self, entry_ids: list[int], *, bootstrap: dict | None = None) -> None:
        self.entry_ids = entry_ids
        self.bootstrap = bootstrap if bootstrap is not None else bootstrap_payload()
        self.standings = standings_payload(entry_ids)
        self.fail_history: set[int] = set()
        self.fail_picks: set[int] = set()
        self.fail_standings = False
        self.fail_status = 500
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path.endswith("/standings/"):
            if self.fail_standings:
                return httpx.Response(self.fail_status)
            return httpx.Response(200, json=self.standings)
        if path.endswith("/bootstrap-static/"):
            return httpx.Response(200, json=self.bootstrap)
        m = self.HISTORY_RE.search(path)
        if m:
            eid = int(m.group(1))
            if eid in self.fail_history:
                return httpx.Response(self.fail_status)
            return httpx.Response(200, json=history_payload(eid))
        m = self.PICKS_RE.search(path)
        if m:
            if int(m.group(1)) in self.fail_picks:
                return httpx.Response(self.fail_status)
            return httpx.Response(200, json=picks_payload())
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def base_env() -> dict[str, str]:
    return {
        "FPL_LEAGUE_ID": "99",
        "GIST_ID": "abc123",
        "GIST_TOKEN": "ghp_secret",
        "LOG_LEVEL": "WARNING",
    }


@pytest.fixture
def api_stub() -> FplApiStub:
    return FplApiStub([101, 102, 103, 104, 105])
