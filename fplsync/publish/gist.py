"""Write the snapshot into a GitHub Gist.

One PATCH per run and no retry adapter on the session; a failed publish aborts
the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from fplsync import __version__
from fplsync.config import Settings
from fplsync.errors import PublishError
from fplsync.report.constants import GIST_RAW_HOST, PUBLISH_TIMEOUT_SEC
from fplsync.report.formatters import format_json, gist_description
from fplsync.report.models import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishResult:
    raw_url: str
    file_url: str
    owner_url: str | None


class GistPublisher:
    """Thin wrapper around requests.Session for the Gist update endpoint."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"token {settings.gist_token}",
                "Content-Type": "application/json",
                "User-Agent": f"fplsync/{__version__}",
            }
        )

    @property
    def url(self) -> str:
        return f"{self.settings.github_api_url}/gists/{self.settings.gist_id}"

    def build_body(self, snapshot: Snapshot, *, pretty: bool = True) -> dict:
        return {
            "description": gist_description(snapshot, self.settings.app_name),
            "files": {
                self.settings.gist_filename: {"content": format_json(snapshot, pretty=pretty)},
            },
        }

    def publish(self, snapshot: Snapshot, *, pretty: bool = True) -> PublishResult:
        """Upsert ``snapshot`` into the configured gist file.

        Raises PublishError on any non-2xx response.
        """
        logger.info("Publishing snapshot to gist %s", self.settings.gist_id)
        r = self.session.patch(
            self.url, json=self.build_body(snapshot, pretty=pretty), timeout=PUBLISH_TIMEOUT_SEC
        )
        if not 200 <= r.status_code < 300:
            raise PublishError(r.status_code, r.text)
        return self._result(r.json())

    def _result(self, data: dict) -> PublishResult:
        filename = self.settings.gist_filename
        files = data.get("files") or {}
        raw_url = (files.get(filename) or {}).get("raw_url") or ""
        file_url = f"{raw_url.split('/raw/')[0]}/raw/{filename}" if raw_url else ""
        login = (data.get("owner") or {}).get("login")
        owner_url = (
            f"{GIST_RAW_HOST}/{login}/{self.settings.gist_id}/raw/{filename}" if login else None
        )
        return PublishResult(raw_url=raw_url, file_url=file_url, owner_url=owner_url)
